import io

import pytest

from cminus.symbols import ScopeTable, SymbolInfo, SymbolTable


def test_param_count_follows_types():
    sym = SymbolInfo("f", "ID", param_types=["int", "float"], param_names=["a", "b"])
    assert sym.param_count() == 2


def test_hash_in_range_and_order_independent():
    table = ScopeTable(7, 1)
    assert table.hash("ab") == table.hash("ba")
    for name in ["a", "main", "foo2", "x_y_z"]:
        assert 0 <= table.hash(name) < 7


def test_insert_lookup_and_duplicate():
    table = ScopeTable(10, 1)
    assert table.insert("x", "ID") is True
    assert table.insert("x", "ID") is False
    found = table.lookup("x")
    assert found.name == "x" and found.type == "ID"
    assert table.lookup("y") is None
    assert len(table) == 1


def test_colliding_names_share_bucket():
    table = ScopeTable(10, 1)
    assert table.insert("ab", "ID")
    assert table.insert("ba", "ID")
    assert table.lookup("ab").name == "ab"
    assert table.lookup("ba").name == "ba"
    assert table.delete("ab") is True
    assert table.lookup("ab") is None
    assert table.lookup("ba").name == "ba"
    assert table.delete("ab") is False


def test_parent_child_count():
    parent = ScopeTable(5, 1)
    ScopeTable(5, 2, parent)
    ScopeTable(5, 3, parent)
    assert parent.child_count == 2


def test_invalid_size():
    with pytest.raises(ValueError):
        ScopeTable(0, 1)


def test_render_variable():
    table = ScopeTable(10, 1)
    table.insert("x", "ID")
    sym = table.lookup("x")
    sym.id_type = "var"
    sym.var_type = "int"
    h = table.hash("x")
    assert table.render() == (
        f"ScopeTable # 1\n{h} --> \n< x : ID >\nVariable\nType: int\n\n\n"
    )


def test_render_array_function_and_error():
    table = ScopeTable(1, 4)
    table.insert("f", "ID")
    table.insert("g", "ID")
    table.insert("e", "ID")
    f = table.lookup("f")
    f.id_type = "func_def"
    f.var_type = "int"
    f.param_types = ["int", "float"]
    f.param_names = ["a", "b"]
    g = table.lookup("g")
    g.id_type = "array"
    g.var_type = "int"
    g.array_size = 10
    out = io.StringIO()
    table.write(out)
    assert out.getvalue() == (
        "ScopeTable # 4\n0 --> "
        "\n< f : ID >\nFunction Definition\nReturn Type: int\n"
        "Number of Parameters: 2\nParameter Details: int a, float b"
        "\n< g : ID >\nArray\nType: int\nSize: 10\n"
        "\n< e : ID >\nError\n"
        "\n\n"
    )


def test_render_empty_scope():
    assert ScopeTable(3, 2).render() == "ScopeTable # 2\n\n"


def test_symbol_table_scopes_and_log():
    out = io.StringIO()
    st = SymbolTable()
    st.enter_scope(out)
    st.enter_scope(out)
    assert st.current_id() == 2
    st.exit_scope(out)
    assert st.current_id() == 1
    st.enter_scope(out)
    assert st.current_id() == 3
    assert out.getvalue() == (
        "New ScopeTable with ID 1 created\n\n"
        "New ScopeTable with ID 2 created\n\n"
        "Scopetable with ID 2 removed\n\n"
        "New ScopeTable with ID 3 created\n\n"
    )


def test_lookup_shadows_outer_scope():
    out = io.StringIO()
    st = SymbolTable(7)
    st.enter_scope(out)
    assert st.insert("a", "ID")
    outer = st.lookup("a")
    st.enter_scope(out)
    assert st.lookup("a") is outer
    assert st.insert("a", "ID")
    inner = st.lookup("a")
    assert inner is not outer and inner.name == "a"
    assert st.remove("a") is True
    assert st.lookup("a") is outer
    assert st.remove("a") is False
    st.exit_scope(out)
    assert st.lookup("missing") is None


def test_operations_without_scope_raise():
    st = SymbolTable()
    with pytest.raises(LookupError):
        st.current_id()
    with pytest.raises(LookupError):
        st.insert("a", "ID")
    with pytest.raises(LookupError):
        st.exit_scope(io.StringIO())


def test_print_all_scopes_innermost_first():
    log = io.StringIO()
    st = SymbolTable(3)
    first = st.enter_scope(log)
    second = st.enter_scope(log)
    out = io.StringIO()
    st.print_all_scopes(out)
    banner = "################################\n\n"
    assert out.getvalue() == banner + second.render() + first.render() + banner