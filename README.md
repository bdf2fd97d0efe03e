# cminus

Building blocks for the front and middle end of a compiler for a small
C-like language: nested symbol tables with per-scope hash buckets, an
abstract syntax tree, and a generator that lowers that tree to
three-address code.

The package has no runtime dependencies.

## Symbol tables

`cminus.symbols` holds a chained-hash symbol table. Each scope is a
`ScopeTable` with a fixed number of buckets; a symbol's bucket is the sum
of its characters' codes modulo the bucket count. `SymbolTable` keeps the
chain of open scopes and logs scope creation and removal to the text
stream passed to `enter_scope` and `exit_scope`.

```python
import io
from cminus.symbols import SymbolTable

log = io.StringIO()
table = SymbolTable(7)
table.enter_scope(log)          # writes "New ScopeTable with ID 1 created"
table.insert("x", "ID")         # True
table.insert("x", "ID")         # False: already in this scope

table.enter_scope(log)
table.lookup("x")               # found in the enclosing scope
table.current_id()              # 2

table.print_all_scopes(log)     # innermost scope first, between banners
table.exit_scope(log)           # writes "Scopetable with ID 2 removed"
```

`lookup` searches from the innermost scope outwards and returns the
`SymbolInfo` it finds, or `None`. `remove` deletes a name from the current
scope only. `current_id`, `insert`, `remove`, `lookup` and `exit_scope`
raise `LookupError` when no scope is open. A single scope can be rendered
on its own with `ScopeTable.render()` or written to a stream with
`ScopeTable.write(out)`.

A `SymbolInfo` carries its `name` and `type` plus `id_type` (`"var"`,
`"array"` or `"func_def"`), `var_type`, `array_size`, `param_types`,
`param_names` and an optional `ast_node`; these decide how the symbol is
printed.

`cminus.scoped` offers a second flavour, `LoggedSymbolTable`, which stores
whole `SymbolRecord` objects (symbol kind, data or return type, parameters,
array size) in `HashedScope` buckets and writes its log to the stream it
was created with. It can be used as a context manager; `close()` (or
leaving the `with` block) pops every remaining scope. Names containing
both `[` and `]` are stored but left out of the printed scopes.

```python
import io
from cminus.scoped import LoggedSymbolTable, SymbolRecord

log = io.StringIO()
with LoggedSymbolTable(7, log) as table:
    table.enter_scope()
    func = SymbolRecord("func", "ID", symbol_type="function_definition", return_type="int")
    func.add_parameter("a", "int")
    table.insert(func)
    table.print_all_scopes()
```

The symbol kind printed as a function definition is `"function_definition"`
by default; pass `function_kind="function"` to either class to change it.

## Abstract syntax tree

`cminus.nodes` defines the tree: expressions (`VarNode`, `ConstNode`,
`BinaryOpNode`, `UnaryOpNode`, `AssignNode`, `FuncCallNode`), statements
(`ExprStmtNode`, `BlockNode`, `IfNode`, `WhileNode`, `ForNode`,
`ReturnNode`, `DeclNode`), function definitions (`FuncDeclNode`), the
argument collector `ArgumentsNode` and the root `ProgramNode`. Every node
implements `generate_code(ctx)`, where `ctx` is a `CodeContext` that hands
out fresh temporaries (`t0`, `t1`, ...) and labels (`L0`, `L1`, ...),
keeps the map from names to temporaries and collects the emitted lines in
its `out` stream (a `StringIO` by default).

## Three-address code

`cminus.tac` turns a `ProgramNode` into a complete listing with a header
and a footer:

```python
from cminus.nodes import (
    AssignNode, BlockNode, ConstNode, DeclNode, ExprStmtNode,
    FuncDeclNode, ProgramNode, ReturnNode, VarNode,
)
from cminus.tac import generate_three_address_code

body = BlockNode()
decl = DeclNode("int")
decl.add_var("a", 0)
body.add_statement(decl)
body.add_statement(ExprStmtNode(AssignNode(VarNode("a", "int"), ConstNode("1", "int"), "int")))
body.add_statement(ReturnNode(VarNode("a", "int")))

main = FuncDeclNode("int", "main", body)

program = ProgramNode()
program.add_unit(main)

print(generate_three_address_code(program))
```

The body of that listing reads:

```
// Function: int main()
// Declaration int a
t0 = 1
a = t0
return a
```

To write straight to an open file instead, use
`ThreeAddrCodeGenerator(program, out).generate()`.

## What the package does not do

There is no lexer, parser or semantic checker and no command-line program:
source text is not read. Syntax trees are built by hand (or by your own
parser) from the node classes, and symbols are entered into the tables by
the calling code.

## Tests

The test suite uses pytest; install the `test` extra to get it.