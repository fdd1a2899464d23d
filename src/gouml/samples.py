DEFAULT_GO_SOURCE = """package main

type Reader interface {
    Read(p []byte) (n int, err error)
}

type Writer interface {
    Write(p []byte) (n int, err error)
}

type ReadWriter interface {
    Reader
    Writer
}

type File struct {
    name string
    content []byte
}

func (f *File) Read(p []byte) (n int, err error) {
    return 0, nil
}

func (f *File) Write(p []byte) (n int, err error) {
    return 0, nil
}"""
