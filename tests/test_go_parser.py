from gouml.extractor.go_parser import GoParser, TypeRegistry
from gouml.extractor.utils import is_exported, strip_comments
from gouml.models.records import AGGREGATE, COMPOSITION, CONTRACT, SATISFACTION
from gouml.samples import DEFAULT_GO_SOURCE

from conftest import ANIMAL_SOURCE, EMBEDDING_SOURCE


def _edges(parsed, edge_type=None):
    return [(rel.source, rel.target) for rel in parsed.edges(edge_type)]


def test_go_parser_extracts_interface_struct_and_receiver_methods(parser):
    parsed = parser.parse(ANIMAL_SOURCE)

    assert [e.name for e in parsed.entities] == ["Animal", "Dog"]

    animal = parsed.get("Animal")
    assert animal.kind == CONTRACT
    assert [(m.name, m.params, m.returns) for m in animal.methods] == [("Speak", "", "string")]
    assert animal.fields == []

    dog = parsed.get("Dog")
    assert dog.kind == AGGREGATE
    assert [(f.name, f.type_expression) for f in dog.fields] == [("Name", "string")]
    assert [(m.name, m.returns) for m in dog.methods] == [("Speak", "string")]

    assert _edges(parsed) == [("Animal", "Dog")]
    assert parsed.relationships[0].edge_type == SATISFACTION


def test_go_parser_records_embedding_as_composition(parser):
    parsed = parser.parse(EMBEDDING_SOURCE)

    b = parsed.get("B")
    assert [(f.name, f.type_expression) for f in b.fields] == [("Extra", "int")]
    assert b.embeds == ["A"]
    assert _edges(parsed, COMPOSITION) == [("A", "B")]


def test_repeated_embedding_collapses_to_one_edge(parser):
    parsed = parser.parse(
        """
        type Base struct {}
        type Child struct {
            Base
            *Base
            Base
        }
        """
    )

    assert parsed.get("Child").embeds == ["Base"]
    assert _edges(parsed) == [("Base", "Child")]


def test_pointer_embedding_strips_dereference(parser):
    parsed = parser.parse("type Server struct {\n    *Logger\n    addr string\n}")

    server = parsed.get("Server")
    assert server.embeds == ["Logger"]
    assert [f.name for f in server.fields] == ["addr"]


def test_embedded_type_without_body_becomes_placeholder(parser):
    parsed = parser.parse("type Server struct {\n    Logger\n}")

    logger = parsed.get("Logger")
    assert logger is not None
    assert logger.kind == AGGREGATE
    assert not logger.declared
    assert logger.fields == [] and logger.methods == []
    assert parsed.declared == ["Server"]


def test_placeholder_reconciled_when_body_appears_later(parser):
    parsed = parser.parse(
        """
        type ReadCloser interface {
            Reader
            Close() error
        }

        type Reader interface {
            Read(p []byte) (int, error)
        }
        """
    )

    assert [e.name for e in parsed.entities] == ["ReadCloser", "Reader"]
    reader = parsed.get("Reader")
    assert reader.kind == CONTRACT
    assert reader.declared
    assert [m.name for m in reader.methods] == ["Read"]


def test_first_body_declaration_keeps_its_kind(parser):
    parsed = parser.parse(
        """
        type Thing struct {
            ID int
        }
        type Thing interface {
            Do()
        }
        """
    )

    assert len(parsed.entities) == 1
    assert parsed.get("Thing").kind == AGGREGATE


def test_receiver_methods_attach_to_same_entity_for_pointer_and_value(parser):
    parsed = parser.parse(
        """
        type Counter struct {
            n int
        }

        func (c *Counter) Inc() {
            c.n++
        }

        func (c Counter) Value() int {
            return c.n
        }
        """
    )

    counter = parsed.get("Counter")
    assert [(m.name, m.params, m.returns) for m in counter.methods] == [
        ("Inc", "", ""),
        ("Value", "", "int"),
    ]
    assert len(parsed.entities) == 1


def test_receiver_for_undeclared_type_creates_placeholder(parser):
    parsed = parser.parse(
        """
        type Config struct {
            Path string
        }

        func (c *Cache) Get(key string) (string, bool) {
            return "", false
        }
        """
    )

    cache = parsed.get("Cache")
    assert cache.kind == AGGREGATE
    assert not cache.declared
    assert [(m.name, m.params, m.returns) for m in cache.methods] == [
        ("Get", "key string", "(string, bool)")
    ]


def test_interface_and_receiver_methods_are_not_deduplicated(parser):
    parsed = parser.parse(
        """
        type Closer interface {
            Close() error
        }

        func (c Closer) Close() error {
            return nil
        }
        """
    )

    assert [m.name for m in parsed.get("Closer").methods] == ["Close", "Close"]


def test_unrecognised_member_lines_are_ignored(parser):
    parsed = parser.parse(
        """
        type Store interface {
            name string
            Get(id int) (Item, error)
            ???
        }

        type Item struct {
            ID, Rev int
            Title string `json:"title"`
            Tags []string
        }
        """
    )

    assert [m.name for m in parsed.get("Store").methods] == ["Get"]
    assert parsed.get("Store").fields == []
    assert [(f.name, f.type_expression) for f in parsed.get("Item").fields] == [
        ("Title", "string"),
        ("Tags", "[]string"),
    ]


def test_comments_are_removed_before_matching(parser):
    parsed = parser.parse(
        """
        /* type Ghost struct {
            Boo int
        } */
        type Shape interface {
            // Perimeter() float64
            Area() float64 // square units
        }
        """
    )

    assert [e.name for e in parsed.entities] == ["Shape"]
    assert [(m.name, m.returns) for m in parsed.get("Shape").methods] == [("Area", "float64")]


class TestSatisfaction:
    SOURCE = """
    type ReadWriter interface {
        Read() error
        Write() error
    }

    type Empty interface {}

    type Full struct {}
    type Partial struct {}

    func (f *Full) Read() error { return nil }
    func (f *Full) Write() error { return nil }
    func (f *Full) Close() error { return nil }
    func (p *Partial) Read() error { return nil }
    """

    def test_struct_with_superset_of_methods_satisfies(self, parser):
        parsed = parser.parse(self.SOURCE)
        assert ("ReadWriter", "Full") in _edges(parsed, SATISFACTION)

    def test_struct_missing_a_method_does_not_satisfy(self, parser):
        parsed = parser.parse(self.SOURCE)
        assert ("ReadWriter", "Partial") not in _edges(parsed, SATISFACTION)

    def test_empty_interface_never_satisfied(self, parser):
        parsed = parser.parse(self.SOURCE)
        assert all(source != "Empty" for source, _ in _edges(parsed))

    def test_interfaces_are_not_satisfaction_targets(self, parser):
        parsed = parser.parse(
            """
            type A interface {
                Run()
            }
            type B interface {
                Run()
                Stop()
            }
            """
        )
        assert _edges(parsed, SATISFACTION) == []

    def test_matching_ignores_signatures(self, parser):
        parsed = parser.parse(
            """
            type Runner interface {
                Run(ctx Context) error
            }
            type Job struct {}
            func (j Job) Run() {}
            """
        )
        assert _edges(parsed, SATISFACTION) == [("Runner", "Job")]


def test_default_sample_relationships(parser):
    parsed = parser.parse(DEFAULT_GO_SOURCE)

    assert [e.name for e in parsed.entities] == ["Reader", "Writer", "ReadWriter", "File"]
    assert [e.name for e in parsed.contracts()] == ["Reader", "Writer", "ReadWriter"]
    assert [e.name for e in parsed.aggregates()] == ["File"]
    assert parsed.get("ReadWriter").embeds == ["Reader", "Writer"]
    assert parsed.get("ReadWriter").methods == []
    assert _edges(parsed, COMPOSITION) == [("Reader", "ReadWriter"), ("Writer", "ReadWriter")]
    assert _edges(parsed, SATISFACTION) == [("Reader", "File"), ("Writer", "File")]


def test_parse_runs_do_not_share_state(parser):
    parser.parse(ANIMAL_SOURCE)
    parsed = parser.parse(EMBEDDING_SOURCE)

    assert parsed.get("Animal") is None
    assert parsed.get("Dog") is None


def test_no_declarations_yields_empty_declared_list(parser):
    parsed = parser.parse("package main\n\nfunc (s *Stack) Push(v int) {\n}\n")

    assert parsed.declared == []
    assert [e.name for e in parsed.entities] == ["Stack"]


def test_type_registry_returns_same_record_for_repeated_names():
    registry = TypeRegistry()
    first = registry.ensure("Node")
    registry.note_composition("Node", "Tree")
    registry.note_composition("Node", "Tree")

    assert registry.ensure("Node") is first
    assert len(registry.relationships()) == 1
    assert [e.name for e in registry.entities()] == ["Node"]


def test_strip_comments_preserves_line_breaks():
    source = "a // one\n/* two\nthree */b\nc"
    assert strip_comments(source) == "a \nb\nc"


def test_is_exported():
    assert is_exported("Name")
    assert not is_exported("name")
    assert not is_exported("_Name")
    assert not is_exported("")


def test_field_type_is_rest_of_line_without_tag(parser):
    parsed = parser.parse(
        """
        type Worker struct {
            jobs chan int
            done <-chan bool
            onErr func(err error) bool
            cache map[string][]byte
            Name string `json:"name"`
        }
        """
    )

    assert [(f.name, f.type_expression) for f in parsed.get("Worker").fields] == [
        ("jobs", "chan int"),
        ("done", "<-chan bool"),
        ("onErr", "func(err error) bool"),
        ("cache", "map[string][]byte"),
        ("Name", "string"),
    ]


def test_function_typed_parameters_keep_their_parentheses(parser):
    parsed = parser.parse(
        """
        type Visitor interface {
            Do(f func(int) error) error
        }

        type Walker struct {}

        func (w *Walker) Do(f func(int) error) error {
            return nil
        }
        """
    )

    expected = [("Do", "f func(int) error", "error")]
    assert [(m.name, m.params, m.returns) for m in parsed.get("Visitor").methods] == expected
    assert [(m.name, m.params, m.returns) for m in parsed.get("Walker").methods] == expected
    assert _edges(parsed, SATISFACTION) == [("Visitor", "Walker")]
