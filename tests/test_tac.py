import io

from cminus.nodes import (
    AssignNode,
    BlockNode,
    ConstNode,
    DeclNode,
    FuncDeclNode,
    ProgramNode,
    ReturnNode,
    VarNode,
)
from cminus.tac import ThreeAddrCodeGenerator, generate_three_address_code

HEADER_FIRST = "//========== THREE ADDRESS CODE =========="
FOOTER_LAST = "//========== END OF CODE =========="
MARKER = "// Three Address Code\n\n"


def sample_program():
    decl = DeclNode("int")
    decl.add_var("a")
    body = BlockNode(
        [
            decl,
            AssignNode(VarNode("a", "int"), ConstNode("1", "int"), "int"),
            ReturnNode(VarNode("a", "int")),
        ]
    )
    program = ProgramNode()
    program.add_unit(FuncDeclNode("int", "main", body))
    return program


def test_empty_program_has_only_header_and_footer():
    text = generate_three_address_code(ProgramNode())
    assert text.startswith(HEADER_FIRST + "\n\n")
    assert text.endswith(MARKER + "\n\n" + FOOTER_LAST + "\n")
    assert "// - t0, t1, etc. are temporary variables" in text


def test_generator_writes_to_given_stream():
    out = io.StringIO()
    ThreeAddrCodeGenerator(sample_program(), out).generate()
    assert out.getvalue() == generate_three_address_code(sample_program())


def test_program_code_sits_between_marker_and_footer():
    text = generate_three_address_code(sample_program())
    body = text.split(MARKER, 1)[1].rsplit("\n\n" + FOOTER_LAST, 1)[0]
    body_lines = body.splitlines()
    assert body_lines[0] == "// Function: int main()"
    assert body_lines[1] == "// Declaration int a"
    assert "return a" in body_lines
    assert body_lines[-1] == ""


def test_each_listing_starts_counters_afresh():
    first = generate_three_address_code(sample_program())
    second = generate_three_address_code(sample_program())
    assert first == second


def test_generator_keeps_counters_between_runs():
    out = io.StringIO()
    generator = ThreeAddrCodeGenerator(sample_program(), out)
    generator.generate()
    used = generator.context.temp_count
    generator.generate()
    assert generator.context.temp_count == 2 * used
    assert out.getvalue().count(HEADER_FIRST) == 2