"""
errstats/stdlib.py — declaration stubs for common standard-library packages.

When the Go toolchain's sources are not available (no ``$GOROOT``), imports
of these packages still resolve to real types: each stub is ordinary Go
source holding bodyless declarations, parsed and checked by the same front
end as user code.  Only the declarations error checks tend to touch are
present; anything missing resolves to an absent type.
"""

from __future__ import annotations

from typing import Dict, Optional

_ERRORS = """
package errors

var ErrUnsupported error

func New(text string) error
func Is(err, target error) bool
func As(err error, target any) bool
func Unwrap(err error) error
func Join(errs ...error) error
"""

_FMT = """
package fmt

import "io"

type Stringer interface {
	String() string
}

type State interface {
	Write(b []byte) (n int, err error)
	Width() (wid int, ok bool)
	Precision() (prec int, ok bool)
	Flag(c int) bool
}

type Formatter interface {
	Format(f State, verb rune)
}

func Errorf(format string, a ...any) error
func Print(a ...any) (n int, err error)
func Printf(format string, a ...any) (n int, err error)
func Println(a ...any) (n int, err error)
func Sprint(a ...any) string
func Sprintf(format string, a ...any) string
func Sprintln(a ...any) string
func Fprint(w io.Writer, a ...any) (n int, err error)
func Fprintf(w io.Writer, format string, a ...any) (n int, err error)
func Fprintln(w io.Writer, a ...any) (n int, err error)
func Sscan(str string, a ...any) (n int, err error)
func Sscanf(str string, format string, a ...any) (n int, err error)
func Scanln(a ...any) (n int, err error)
func Fscan(r io.Reader, a ...any) (n int, err error)
func Append(b []byte, a ...any) []byte
"""

_IO = """
package io

type Reader interface {
	Read(p []byte) (n int, err error)
}

type Writer interface {
	Write(p []byte) (n int, err error)
}

type Closer interface {
	Close() error
}

type Seeker interface {
	Seek(offset int64, whence int) (int64, error)
}

type ReadWriter interface {
	Reader
	Writer
}

type ReadCloser interface {
	Reader
	Closer
}

type WriteCloser interface {
	Writer
	Closer
}

type ReadWriteCloser interface {
	Reader
	Writer
	Closer
}

type ReaderFrom interface {
	ReadFrom(r Reader) (n int64, err error)
}

type WriterTo interface {
	WriteTo(w Writer) (n int64, err error)
}

type ByteReader interface {
	ReadByte() (byte, error)
}

type StringWriter interface {
	WriteString(s string) (n int, err error)
}

type PipeReader struct{}

type PipeWriter struct{}

var EOF error
var ErrUnexpectedEOF error
var ErrShortWrite error
var ErrClosedPipe error
var Discard Writer

func Copy(dst Writer, src Reader) (written int64, err error)
func CopyN(dst Writer, src Reader, n int64) (written int64, err error)
func ReadAll(r Reader) ([]byte, error)
func ReadFull(r Reader, buf []byte) (n int, err error)
func WriteString(w Writer, s string) (n int, err error)
func NopCloser(r Reader) ReadCloser
func MultiReader(readers ...Reader) Reader
func MultiWriter(writers ...Writer) Writer
func Pipe() (*PipeReader, *PipeWriter)

func (r *PipeReader) Read(data []byte) (n int, err error)
func (r *PipeReader) Close() error
func (w *PipeWriter) Write(data []byte) (n int, err error)
func (w *PipeWriter) Close() error
func (w *PipeWriter) CloseWithError(err error) error
"""

_IO_FS = """
package fs

import "time"

type FileMode uint32

func (m FileMode) IsDir() bool
func (m FileMode) IsRegular() bool
func (m FileMode) Perm() FileMode
func (m FileMode) String() string

type FileInfo interface {
	Name() string
	Size() int64
	Mode() FileMode
	ModTime() time.Time
	IsDir() bool
	Sys() any
}

type DirEntry interface {
	Name() string
	IsDir() bool
	Type() FileMode
	Info() (FileInfo, error)
}

type File interface {
	Stat() (FileInfo, error)
	Read([]byte) (int, error)
	Close() error
}

type FS interface {
	Open(name string) (File, error)
}

type PathError struct {
	Op   string
	Path string
	Err  error
}

func (e *PathError) Error() string
func (e *PathError) Unwrap() error

type WalkDirFunc func(path string, d DirEntry, err error) error

var ErrInvalid error
var ErrPermission error
var ErrExist error
var ErrNotExist error
var ErrClosed error

func WalkDir(fsys FS, root string, fn WalkDirFunc) error
func ReadFile(fsys FS, name string) ([]byte, error)
"""

_IO_IOUTIL = """
package ioutil

import (
	"io"
	"io/fs"
	"os"
)

var Discard io.Writer

func ReadAll(r io.Reader) ([]byte, error)
func ReadFile(filename string) ([]byte, error)
func WriteFile(filename string, data []byte, perm fs.FileMode) error
func ReadDir(dirname string) ([]fs.FileInfo, error)
func TempDir(dir, pattern string) (name string, err error)
func TempFile(dir, pattern string) (f *os.File, err error)
func NopCloser(r io.Reader) io.ReadCloser
"""

_OS = """
package os

import (
	"io/fs"
	"time"
)

type File struct{}

type FileInfo = fs.FileInfo
type FileMode = fs.FileMode
type DirEntry = fs.DirEntry
type PathError = fs.PathError

type LinkError struct {
	Op  string
	Old string
	New string
	Err error
}

func (e *LinkError) Error() string
func (e *LinkError) Unwrap() error

type SyscallError struct {
	Syscall string
	Err     error
}

func (e *SyscallError) Error() string
func (e *SyscallError) Unwrap() error

type Signal interface {
	String() string
	Signal()
}

type Process struct {
	Pid int
}

type ProcessState struct{}

var Stdin *File
var Stdout *File
var Stderr *File
var Args []string

var ErrInvalid error
var ErrPermission error
var ErrExist error
var ErrNotExist error
var ErrClosed error
var ErrDeadlineExceeded error

func Open(name string) (*File, error)
func Create(name string) (*File, error)
func OpenFile(name string, flag int, perm FileMode) (*File, error)
func CreateTemp(dir, pattern string) (*File, error)
func NewFile(fd uintptr, name string) *File
func Pipe() (r *File, w *File, err error)
func Stat(name string) (FileInfo, error)
func Lstat(name string) (FileInfo, error)
func ReadFile(name string) ([]byte, error)
func WriteFile(name string, data []byte, perm FileMode) error
func ReadDir(name string) ([]DirEntry, error)
func Mkdir(name string, perm FileMode) error
func MkdirAll(path string, perm FileMode) error
func MkdirTemp(dir, pattern string) (string, error)
func Remove(name string) error
func RemoveAll(path string) error
func Rename(oldpath, newpath string) error
func Chdir(dir string) error
func Getwd() (dir string, err error)
func Getenv(key string) string
func LookupEnv(key string) (string, bool)
func Setenv(key, value string) error
func Unsetenv(key string) error
func Environ() []string
func Hostname() (name string, err error)
func Executable() (string, error)
func UserHomeDir() (string, error)
func TempDir() string
func Getpid() int
func Exit(code int)
func IsExist(err error) bool
func IsNotExist(err error) bool
func IsPermission(err error) bool
func FindProcess(pid int) (*Process, error)

func (f *File) Name() string
func (f *File) Close() error
func (f *File) Read(b []byte) (n int, err error)
func (f *File) ReadAt(b []byte, off int64) (n int, err error)
func (f *File) Write(b []byte) (n int, err error)
func (f *File) WriteString(s string) (n int, err error)
func (f *File) WriteAt(b []byte, off int64) (n int, err error)
func (f *File) Seek(offset int64, whence int) (ret int64, err error)
func (f *File) Stat() (FileInfo, error)
func (f *File) Sync() error
func (f *File) Truncate(size int64) error
func (f *File) Chmod(mode FileMode) error
func (f *File) ReadDir(n int) ([]DirEntry, error)
func (f *File) Readdirnames(n int) (names []string, err error)
func (f *File) Fd() uintptr
func (f *File) SetDeadline(t time.Time) error

func (p *Process) Kill() error
func (p *Process) Release() error
func (p *Process) Signal(sig Signal) error
func (p *Process) Wait() (*ProcessState, error)

func (p *ProcessState) ExitCode() int
func (p *ProcessState) Exited() bool
func (p *ProcessState) Success() bool
func (p *ProcessState) String() string
"""

_OS_EXEC = """
package exec

import (
	"context"
	"io"
	"os"
)

type Cmd struct {
	Path         string
	Args         []string
	Env          []string
	Dir          string
	Stdin        io.Reader
	Stdout       io.Writer
	Stderr       io.Writer
	Process      *os.Process
	ProcessState *os.ProcessState
	Err          error
}

type ExitError struct {
	*os.ProcessState
	Stderr []byte
}

func (e *ExitError) Error() string

type Error struct {
	Name string
	Err  error
}

func (e *Error) Error() string
func (e *Error) Unwrap() error

var ErrNotFound error

func Command(name string, arg ...string) *Cmd
func CommandContext(ctx context.Context, name string, arg ...string) *Cmd
func LookPath(file string) (string, error)

func (c *Cmd) Run() error
func (c *Cmd) Start() error
func (c *Cmd) Wait() error
func (c *Cmd) Output() ([]byte, error)
func (c *Cmd) CombinedOutput() ([]byte, error)
func (c *Cmd) StdinPipe() (io.WriteCloser, error)
func (c *Cmd) StdoutPipe() (io.ReadCloser, error)
func (c *Cmd) StderrPipe() (io.ReadCloser, error)
func (c *Cmd) String() string
"""

_BUFIO = """
package bufio

import "io"

type Reader struct{}

type Writer struct{}

type ReadWriter struct {
	*Reader
	*Writer
}

type Scanner struct{}

type SplitFunc func(data []byte, atEOF bool) (advance int, token []byte, err error)

var ErrTooLong error
var ErrBufferFull error
var ErrNegativeCount error

func NewReader(rd io.Reader) *Reader
func NewReaderSize(rd io.Reader, size int) *Reader
func NewWriter(w io.Writer) *Writer
func NewWriterSize(w io.Writer, size int) *Writer
func NewReadWriter(r *Reader, w *Writer) *ReadWriter
func NewScanner(r io.Reader) *Scanner
func ScanLines(data []byte, atEOF bool) (advance int, token []byte, err error)
func ScanWords(data []byte, atEOF bool) (advance int, token []byte, err error)
func ScanRunes(data []byte, atEOF bool) (advance int, token []byte, err error)

func (b *Reader) Read(p []byte) (n int, err error)
func (b *Reader) ReadByte() (byte, error)
func (b *Reader) ReadRune() (r rune, size int, err error)
func (b *Reader) ReadBytes(delim byte) ([]byte, error)
func (b *Reader) ReadString(delim byte) (string, error)
func (b *Reader) ReadLine() (line []byte, isPrefix bool, err error)
func (b *Reader) Peek(n int) ([]byte, error)

func (b *Writer) Write(p []byte) (nn int, err error)
func (b *Writer) WriteByte(c byte) error
func (b *Writer) WriteRune(r rune) (size int, err error)
func (b *Writer) WriteString(s string) (int, error)
func (b *Writer) Flush() error

func (s *Scanner) Scan() bool
func (s *Scanner) Text() string
func (s *Scanner) Bytes() []byte
func (s *Scanner) Err() error
func (s *Scanner) Buffer(buf []byte, max int)
func (s *Scanner) Split(split SplitFunc)
"""

_BYTES = """
package bytes

import "io"

type Buffer struct{}

type Reader struct{}

var ErrTooLarge error

func NewBuffer(buf []byte) *Buffer
func NewBufferString(s string) *Buffer
func NewReader(b []byte) *Reader
func Compare(a, b []byte) int
func Contains(b, subslice []byte) bool
func Equal(a, b []byte) bool
func HasPrefix(s, prefix []byte) bool
func HasSuffix(s, suffix []byte) bool
func Index(s, sep []byte) int
func Join(s [][]byte, sep []byte) []byte
func Split(s, sep []byte) [][]byte
func ToLower(s []byte) []byte
func ToUpper(s []byte) []byte
func TrimSpace(s []byte) []byte

func (b *Buffer) Bytes() []byte
func (b *Buffer) String() string
func (b *Buffer) Len() int
func (b *Buffer) Reset()
func (b *Buffer) Write(p []byte) (n int, err error)
func (b *Buffer) WriteByte(c byte) error
func (b *Buffer) WriteRune(r rune) (n int, err error)
func (b *Buffer) WriteString(s string) (n int, err error)
func (b *Buffer) Read(p []byte) (n int, err error)
func (b *Buffer) ReadBytes(delim byte) (line []byte, err error)
func (b *Buffer) ReadString(delim byte) (line string, err error)
func (b *Buffer) ReadFrom(r io.Reader) (n int64, err error)
func (b *Buffer) WriteTo(w io.Writer) (n int64, err error)

func (r *Reader) Len() int
func (r *Reader) Read(b []byte) (n int, err error)
func (r *Reader) ReadByte() (byte, error)
"""

_STRINGS = """
package strings

type Builder struct{}

type Reader struct{}

type Replacer struct{}

func NewReader(s string) *Reader
func NewReplacer(oldnew ...string) *Replacer
func Contains(s, substr string) bool
func ContainsAny(s, chars string) bool
func ContainsRune(s string, r rune) bool
func Count(s, substr string) int
func Cut(s, sep string) (before, after string, found bool)
func EqualFold(s, t string) bool
func Fields(s string) []string
func HasPrefix(s, prefix string) bool
func HasSuffix(s, suffix string) bool
func Index(s, substr string) int
func IndexByte(s string, c byte) int
func Join(elems []string, sep string) string
func LastIndex(s, substr string) int
func Repeat(s string, count int) string
func Replace(s, old, repl string, n int) string
func ReplaceAll(s, old, repl string) string
func Split(s, sep string) []string
func SplitN(s, sep string, n int) []string
func Title(s string) string
func ToLower(s string) string
func ToUpper(s string) string
func Trim(s, cutset string) string
func TrimLeft(s, cutset string) string
func TrimRight(s, cutset string) string
func TrimPrefix(s, prefix string) string
func TrimSuffix(s, suffix string) string
func TrimSpace(s string) string

func (b *Builder) Len() int
func (b *Builder) Reset()
func (b *Builder) String() string
func (b *Builder) Write(p []byte) (int, error)
func (b *Builder) WriteByte(c byte) error
func (b *Builder) WriteRune(r rune) (int, error)
func (b *Builder) WriteString(s string) (int, error)

func (r *Reader) Len() int
func (r *Reader) Read(b []byte) (n int, err error)
func (r *Reader) ReadByte() (byte, error)

func (r *Replacer) Replace(s string) string
"""

_STRCONV = """
package strconv

type NumError struct {
	Func string
	Num  string
	Err  error
}

func (e *NumError) Error() string
func (e *NumError) Unwrap() error

var ErrRange error
var ErrSyntax error

func Atoi(s string) (int, error)
func Itoa(i int) string
func ParseBool(str string) (bool, error)
func ParseFloat(s string, bitSize int) (float64, error)
func ParseInt(s string, base int, bitSize int) (i int64, err error)
func ParseUint(s string, base int, bitSize int) (uint64, error)
func FormatBool(b bool) string
func FormatFloat(f float64, fmt byte, prec, bitSize int) string
func FormatInt(i int64, base int) string
func Quote(s string) string
func Unquote(s string) (string, error)
"""

_PATH_FILEPATH = """
package filepath

import "io/fs"

type WalkFunc func(path string, info fs.FileInfo, err error) error

var ErrBadPattern error
var SkipDir error
var SkipAll error

func Abs(path string) (string, error)
func Base(path string) string
func Clean(path string) string
func Dir(path string) string
func EvalSymlinks(path string) (string, error)
func Ext(path string) string
func FromSlash(path string) string
func Glob(pattern string) (matches []string, err error)
func IsAbs(path string) bool
func Join(elem ...string) string
func Match(pattern, name string) (matched bool, err error)
func Rel(basepath, targpath string) (string, error)
func Split(path string) (dir, file string)
func ToSlash(path string) string
func Walk(root string, fn WalkFunc) error
func WalkDir(root string, fn fs.WalkDirFunc) error
"""

_ENCODING_JSON = """
package json

import "io"

type Marshaler interface {
	MarshalJSON() ([]byte, error)
}

type Unmarshaler interface {
	UnmarshalJSON([]byte) error
}

type Decoder struct{}

type Encoder struct{}

type RawMessage []byte

func (m RawMessage) MarshalJSON() ([]byte, error)
func (m *RawMessage) UnmarshalJSON(data []byte) error

type Number string

func (n Number) Float64() (float64, error)
func (n Number) Int64() (int64, error)
func (n Number) String() string

type SyntaxError struct {
	Offset int64
}

func (e *SyntaxError) Error() string

type UnmarshalTypeError struct {
	Value  string
	Offset int64
	Struct string
	Field  string
}

func (e *UnmarshalTypeError) Error() string

type InvalidUnmarshalError struct{}

func (e *InvalidUnmarshalError) Error() string

type MarshalerError struct{}

func (e *MarshalerError) Error() string
func (e *MarshalerError) Unwrap() error

func Marshal(v any) ([]byte, error)
func MarshalIndent(v any, prefix, indent string) ([]byte, error)
func Unmarshal(data []byte, v any) error
func Valid(data []byte) bool
func NewDecoder(r io.Reader) *Decoder
func NewEncoder(w io.Writer) *Encoder

func (dec *Decoder) Decode(v any) error
func (dec *Decoder) DisallowUnknownFields()
func (dec *Decoder) More() bool
func (enc *Encoder) Encode(v any) error
func (enc *Encoder) SetIndent(prefix, indent string)
"""

_NET = """
package net

import "time"

type Addr interface {
	Network() string
	String() string
}

type Conn interface {
	Read(b []byte) (n int, err error)
	Write(b []byte) (n int, err error)
	Close() error
	LocalAddr() Addr
	RemoteAddr() Addr
	SetDeadline(t time.Time) error
	SetReadDeadline(t time.Time) error
	SetWriteDeadline(t time.Time) error
}

type Listener interface {
	Accept() (Conn, error)
	Close() error
	Addr() Addr
}

type Error interface {
	error
	Timeout() bool
}

type OpError struct {
	Op   string
	Net  string
	Addr Addr
	Err  error
}

func (e *OpError) Error() string
func (e *OpError) Timeout() bool
func (e *OpError) Unwrap() error

type IP []byte

func (ip IP) String() string

var ErrClosed error

func Dial(network, address string) (Conn, error)
func DialTimeout(network, address string, timeout time.Duration) (Conn, error)
func JoinHostPort(host, port string) string
func Listen(network, address string) (Listener, error)
func LookupHost(host string) (addrs []string, err error)
func ParseIP(s string) IP
func SplitHostPort(hostport string) (host, port string, err error)
"""

_NET_URL = """
package url

type Userinfo struct{}

type URL struct {
	Scheme   string
	User     *Userinfo
	Host     string
	Path     string
	RawQuery string
	Fragment string
}

type Values map[string][]string

func (v Values) Add(key, value string)
func (v Values) Encode() string
func (v Values) Get(key string) string
func (v Values) Set(key, value string)

type Error struct {
	Op  string
	URL string
	Err error
}

func (e *Error) Error() string
func (e *Error) Unwrap() error

func Parse(rawURL string) (*URL, error)
func ParseQuery(query string) (Values, error)
func ParseRequestURI(rawURL string) (*URL, error)
func PathEscape(s string) string
func QueryEscape(s string) string
func QueryUnescape(s string) (string, error)

func (u *URL) Hostname() string
func (u *URL) Port() string
func (u *URL) Query() Values
func (u *URL) ResolveReference(ref *URL) *URL
func (u *URL) String() string
"""

_NET_HTTP = """
package http

import (
	"context"
	"io"
	"net/url"
	"time"
)

type Header map[string][]string

func (h Header) Add(key, value string)
func (h Header) Del(key string)
func (h Header) Get(key string) string
func (h Header) Set(key, value string)

type Cookie struct {
	Name  string
	Value string
}

type Request struct {
	Method        string
	URL           *url.URL
	Header        Header
	Body          io.ReadCloser
	ContentLength int64
	Host          string
	Form          url.Values
	RemoteAddr    string
}

func (r *Request) Context() context.Context
func (r *Request) Cookie(name string) (*Cookie, error)
func (r *Request) FormValue(key string) string
func (r *Request) ParseForm() error
func (r *Request) WithContext(ctx context.Context) *Request

type Response struct {
	Status        string
	StatusCode    int
	Header        Header
	Body          io.ReadCloser
	ContentLength int64
	Request       *Request
}

type ResponseWriter interface {
	Header() Header
	Write([]byte) (int, error)
	WriteHeader(statusCode int)
}

type Handler interface {
	ServeHTTP(ResponseWriter, *Request)
}

type HandlerFunc func(ResponseWriter, *Request)

func (f HandlerFunc) ServeHTTP(w ResponseWriter, r *Request)

type ServeMux struct{}

func (mux *ServeMux) Handle(pattern string, handler Handler)
func (mux *ServeMux) HandleFunc(pattern string, handler func(ResponseWriter, *Request))
func (mux *ServeMux) ServeHTTP(w ResponseWriter, r *Request)

type Client struct {
	Timeout time.Duration
}

func (c *Client) Do(req *Request) (*Response, error)
func (c *Client) Get(url string) (resp *Response, err error)
func (c *Client) Post(url, contentType string, body io.Reader) (resp *Response, err error)

type Server struct {
	Addr         string
	Handler      Handler
	ReadTimeout  time.Duration
	WriteTimeout time.Duration
}

func (srv *Server) Close() error
func (srv *Server) ListenAndServe() error
func (srv *Server) ListenAndServeTLS(certFile, keyFile string) error
func (srv *Server) Shutdown(ctx context.Context) error

var DefaultClient *Client
var ErrHandlerTimeout error
var ErrNoCookie error
var ErrServerClosed error

const (
	MethodGet    = "GET"
	MethodPost   = "POST"
	MethodPut    = "PUT"
	MethodDelete = "DELETE"
)

const (
	StatusOK                  = 200
	StatusCreated             = 201
	StatusNoContent           = 204
	StatusBadRequest          = 400
	StatusUnauthorized        = 401
	StatusForbidden           = 403
	StatusNotFound            = 404
	StatusInternalServerError = 500
)

func Error(w ResponseWriter, error string, code int)
func Get(url string) (resp *Response, err error)
func Handle(pattern string, handler Handler)
func HandleFunc(pattern string, handler func(ResponseWriter, *Request))
func ListenAndServe(addr string, handler Handler) error
func NewRequest(method, url string, body io.Reader) (*Request, error)
func NewRequestWithContext(ctx context.Context, method, url string, body io.Reader) (*Request, error)
func NewServeMux() *ServeMux
func NotFound(w ResponseWriter, r *Request)
func Post(url, contentType string, body io.Reader) (resp *Response, err error)
func StatusText(code int) string
"""

_TIME = """
package time

type Duration int64

func (d Duration) Milliseconds() int64
func (d Duration) Seconds() float64
func (d Duration) String() string

const (
	Nanosecond  Duration = 1
	Microsecond          = 1000 * Nanosecond
	Millisecond          = 1000 * Microsecond
	Second               = 1000 * Millisecond
	Minute               = 60 * Second
	Hour                 = 60 * Minute
)

const RFC3339 = "2006-01-02T15:04:05Z07:00"

type Month int

func (m Month) String() string

type Weekday int

func (d Weekday) String() string

type Location struct{}

var UTC *Location
var Local *Location

type Time struct{}

type Timer struct {
	C <-chan Time
}

type Ticker struct {
	C <-chan Time
}

type ParseError struct {
	Layout  string
	Value   string
	Message string
}

func (e *ParseError) Error() string

func After(d Duration) <-chan Time
func Date(year int, month Month, day, hour, min, sec, nsec int, loc *Location) Time
func LoadLocation(name string) (*Location, error)
func NewTicker(d Duration) *Ticker
func NewTimer(d Duration) *Timer
func Now() Time
func Parse(layout, value string) (Time, error)
func ParseDuration(s string) (Duration, error)
func ParseInLocation(layout, value string, loc *Location) (Time, error)
func Since(t Time) Duration
func Sleep(d Duration)
func Tick(d Duration) <-chan Time
func Unix(sec int64, nsec int64) Time
func Until(t Time) Duration

func (t Time) Add(d Duration) Time
func (t Time) After(u Time) bool
func (t Time) Before(u Time) bool
func (t Time) Equal(u Time) bool
func (t Time) Format(layout string) string
func (t Time) In(loc *Location) Time
func (t Time) IsZero() bool
func (t Time) String() string
func (t Time) Sub(u Time) Duration
func (t Time) Truncate(d Duration) Time
func (t Time) UTC() Time
func (t Time) Unix() int64
func (t Time) UnixNano() int64
func (t Time) Year() int
func (t Time) MarshalJSON() ([]byte, error)
func (t *Time) UnmarshalJSON(data []byte) error

func (t *Timer) Reset(d Duration) bool
func (t *Timer) Stop() bool
func (t *Ticker) Stop()
"""

_CONTEXT = """
package context

import "time"

type Context interface {
	Deadline() (deadline time.Time, ok bool)
	Done() <-chan struct{}
	Err() error
	Value(key any) any
}

type CancelFunc func()

type CancelCauseFunc func(cause error)

var Canceled error
var DeadlineExceeded error

func Background() Context
func TODO() Context
func Cause(c Context) error
func WithCancel(parent Context) (ctx Context, cancel CancelFunc)
func WithCancelCause(parent Context) (ctx Context, cancel CancelCauseFunc)
func WithDeadline(parent Context, d time.Time) (Context, CancelFunc)
func WithTimeout(parent Context, timeout time.Duration) (Context, CancelFunc)
func WithValue(parent Context, key, val any) Context
"""

_DATABASE_SQL = """
package sql

import "context"

type DB struct{}

type Tx struct{}

type TxOptions struct {
	ReadOnly bool
}

type Stmt struct{}

type Rows struct{}

type Row struct{}

type Result interface {
	LastInsertId() (int64, error)
	RowsAffected() (int64, error)
}

type NullString struct {
	String string
	Valid  bool
}

type NullInt64 struct {
	Int64 int64
	Valid bool
}

var ErrConnDone error
var ErrNoRows error
var ErrTxDone error

func Open(driverName, dataSourceName string) (*DB, error)

func (db *DB) Begin() (*Tx, error)
func (db *DB) BeginTx(ctx context.Context, opts *TxOptions) (*Tx, error)
func (db *DB) Close() error
func (db *DB) Exec(query string, args ...any) (Result, error)
func (db *DB) ExecContext(ctx context.Context, query string, args ...any) (Result, error)
func (db *DB) Ping() error
func (db *DB) PingContext(ctx context.Context) error
func (db *DB) Prepare(query string) (*Stmt, error)
func (db *DB) Query(query string, args ...any) (*Rows, error)
func (db *DB) QueryContext(ctx context.Context, query string, args ...any) (*Rows, error)
func (db *DB) QueryRow(query string, args ...any) *Row
func (db *DB) QueryRowContext(ctx context.Context, query string, args ...any) *Row

func (tx *Tx) Commit() error
func (tx *Tx) Exec(query string, args ...any) (Result, error)
func (tx *Tx) Query(query string, args ...any) (*Rows, error)
func (tx *Tx) QueryRow(query string, args ...any) *Row
func (tx *Tx) Rollback() error

func (s *Stmt) Close() error
func (s *Stmt) Exec(args ...any) (Result, error)
func (s *Stmt) Query(args ...any) (*Rows, error)
func (s *Stmt) QueryRow(args ...any) *Row

func (rs *Rows) Close() error
func (rs *Rows) Columns() ([]string, error)
func (rs *Rows) Err() error
func (rs *Rows) Next() bool
func (rs *Rows) Scan(dest ...any) error

func (r *Row) Err() error
func (r *Row) Scan(dest ...any) error
"""

_SYNC = """
package sync

type Mutex struct{}

func (m *Mutex) Lock()
func (m *Mutex) TryLock() bool
func (m *Mutex) Unlock()

type RWMutex struct{}

func (rw *RWMutex) Lock()
func (rw *RWMutex) RLock()
func (rw *RWMutex) RUnlock()
func (rw *RWMutex) Unlock()

type WaitGroup struct{}

func (wg *WaitGroup) Add(delta int)
func (wg *WaitGroup) Done()
func (wg *WaitGroup) Wait()

type Once struct{}

func (o *Once) Do(f func())

type Map struct{}

func (m *Map) Delete(key any)
func (m *Map) Load(key any) (value any, ok bool)
func (m *Map) Range(f func(key, value any) bool)
func (m *Map) Store(key, value any)

type Pool struct {
	New func() any
}

func (p *Pool) Get() any
func (p *Pool) Put(x any)
"""

_LOG = """
package log

import "io"

type Logger struct{}

func Default() *Logger
func New(out io.Writer, prefix string, flag int) *Logger
func Fatal(v ...any)
func Fatalf(format string, v ...any)
func Fatalln(v ...any)
func Panic(v ...any)
func Panicf(format string, v ...any)
func Print(v ...any)
func Printf(format string, v ...any)
func Println(v ...any)
func SetFlags(flag int)
func SetOutput(w io.Writer)
func SetPrefix(prefix string)

func (l *Logger) Fatal(v ...any)
func (l *Logger) Fatalf(format string, v ...any)
func (l *Logger) Output(calldepth int, s string) error
func (l *Logger) Print(v ...any)
func (l *Logger) Printf(format string, v ...any)
func (l *Logger) Println(v ...any)
"""

_REGEXP = """
package regexp

type Regexp struct{}

func Compile(expr string) (*Regexp, error)
func MatchString(pattern string, s string) (matched bool, err error)
func MustCompile(str string) *Regexp

func (re *Regexp) FindAllString(s string, n int) []string
func (re *Regexp) FindString(s string) string
func (re *Regexp) FindStringSubmatch(s string) []string
func (re *Regexp) MatchString(s string) bool
func (re *Regexp) ReplaceAllString(src, repl string) string
func (re *Regexp) Split(s string, n int) []string
func (re *Regexp) String() string
"""

_FLAG = """
package flag

import "time"

type ErrorHandling int

const (
	ContinueOnError ErrorHandling = iota
	ExitOnError
	PanicOnError
)

type FlagSet struct {
	Usage func()
}

var CommandLine *FlagSet
var ErrHelp error
var Usage func()

func Arg(i int) string
func Args() []string
func Bool(name string, value bool, usage string) *bool
func BoolVar(p *bool, name string, value bool, usage string)
func Duration(name string, value time.Duration, usage string) *time.Duration
func Int(name string, value int, usage string) *int
func IntVar(p *int, name string, value int, usage string)
func NArg() int
func NewFlagSet(name string, errorHandling ErrorHandling) *FlagSet
func Parse()
func Parsed() bool
func String(name string, value string, usage string) *string
func StringVar(p *string, name string, value string, usage string)

func (f *FlagSet) Args() []string
func (f *FlagSet) Bool(name string, value bool, usage string) *bool
func (f *FlagSet) Int(name string, value int, usage string) *int
func (f *FlagSet) Parse(arguments []string) error
func (f *FlagSet) String(name string, value string, usage string) *string
"""

STDLIB_STUBS: Dict[str, str] = {
    "bufio": _BUFIO,
    "bytes": _BYTES,
    "context": _CONTEXT,
    "database/sql": _DATABASE_SQL,
    "encoding/json": _ENCODING_JSON,
    "errors": _ERRORS,
    "flag": _FLAG,
    "fmt": _FMT,
    "io": _IO,
    "io/fs": _IO_FS,
    "io/ioutil": _IO_IOUTIL,
    "log": _LOG,
    "net": _NET,
    "net/http": _NET_HTTP,
    "net/url": _NET_URL,
    "os": _OS,
    "os/exec": _OS_EXEC,
    "path/filepath": _PATH_FILEPATH,
    "regexp": _REGEXP,
    "strconv": _STRCONV,
    "strings": _STRINGS,
    "sync": _SYNC,
    "time": _TIME,
}


def stub_source(import_path: str) -> Optional[str]:
    """Return the declaration stub for *import_path*, if one ships."""
    return STDLIB_STUBS.get(import_path)


def is_standard_library(import_path: str) -> bool:
    """Standard-library import paths have no dot in their first element."""
    first = import_path.split("/", 1)[0]
    return "." not in first


__all__ = ["STDLIB_STUBS", "stub_source", "is_standard_library"]
