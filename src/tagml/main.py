import argparse
import logging
import sys
from typing import Sequence

from tagml import abstract_syntax as ast
from tagml.type_checker import TypeChecker
from tagml.type_impls import TypeCheckError
from tagml.type_parser import parse_type


def demo_script() -> ast.Script:
    nil = lambda: ast.TagExpr("Nil")
    cons = lambda x, xs: ast.TagExpr("Cons", [x, xs])
    ident = lambda: ast.Function("x", ast.Reference("x"))
    return ast.Script(
        [
            ast.TypeDefinition(
                [
                    ast.TypeItem(
                        "List",
                        ["a"],
                        [
                            ast.TagDecl("Nil"),
                            ast.TagDecl("Cons", [parse_type("a"), parse_type("List a")]),
                        ],
                    )
                ]
            ),
            ast.ToplevelDo(cons(ast.Literal(1), nil())),
            ast.ToplevelDo(ast.Application(ident(), ast.Literal(42))),
            ast.ToplevelDo(
                ast.Match(
                    cons(ast.Char("x"), nil()),
                    ast.BindingPattern("xs"),
                    ast.Reference("xs"),
                    nil(),
                )
            ),
            ast.ToplevelDo(
                ast.Let(
                    "id",
                    ident(),
                    ast.Conditional(
                        ast.Application(ast.Reference("id"), ast.Literal(True)),
                        ast.Application(ast.Reference("id"), ast.Literal("yes")),
                        ast.Literal("no"),
                    ),
                )
            ),
            ast.ToplevelDo(
                ast.Application(
                    ast.Application(ast.Reference("__operator_pls"), ast.Literal(1)),
                    ast.Literal(2),
                )
            ),
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tagml", description="Type check the tagml demo program")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every unification step")
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="continue with the next top-level item after a type error",
    )
    return parser


def main(argv: Sequence[str] | None = None, script: ast.Script | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    checker = TypeChecker()
    try:
        errors = checker.check_script(
            demo_script() if script is None else script, keep_going=args.keep_going
        )
    except TypeCheckError as e:
        print(e)
        return 1
    except Exception as e:
        print("fatal error:")
        print(f"{type(e).__name__}: {e}")
        return 2

    for e in errors:
        print(e)
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
