import functools

import pyparsing as pp

from tagml.catalogue import map_type_params
from tagml.type_impls import (
    Type,
    TypeVar,
    TypeScheme,
    FuncType,
    UserType,
    IntType,
    DoubleType,
    StringType,
    CharType,
    UnitType,
    BoolType,
)


def parse_type(src: str) -> Type:
    return type_expr.parse_string(src, True)[0]


def parse_scheme(src: str) -> TypeScheme:
    """Parse a type and quantify over all names starting with a lowercase letter."""
    t = parse_type(src)
    params = {name: TypeVar() for name in sorted(parameter_names(t))}
    return TypeScheme(
        frozenset(v.id for v in params.values()), map_type_params(t, params)
    )


def parameter_names(t: Type) -> set[str]:
    match t:
        case UserType(name, ()) if name[0].islower():
            return {name}
        case UserType(_, args):
            return set().union(*map(parameter_names, args))
        case FuncType(arg, ret):
            return parameter_names(arg) | parameter_names(ret)
        case _:
            return set()


PRIMITIVES = {
    "Int": IntType(),
    "Double": DoubleType(),
    "String": StringType(),
    "Char": CharType(),
    "Unit": UnitType(),
    "Bool": BoolType(),
}


def named_type(name: str, args) -> Type:
    if not args and name in PRIMITIVES:
        return PRIMITIVES[name]
    return UserType(name, args)


### Grammar

ident = pp.Word(pp.alphas + "_", pp.alphanums + "_'")

type_expr = pp.Forward()

simple_type = ident.copy().set_parse_action(lambda t: named_type(t[0], ())) | (
    pp.Suppress("(") + type_expr + pp.Suppress(")")
)

applied_type = (ident + pp.OneOrMore(simple_type)).set_parse_action(
    lambda t: UserType(t[0], list(t[1:]))
)

arrow_operand = applied_type | simple_type

type_expr <<= (arrow_operand + pp.ZeroOrMore(pp.Suppress("->") + arrow_operand)).set_parse_action(
    lambda t: functools.reduce(lambda ret, arg: FuncType(arg, ret), reversed(t[:-1]), t[-1])
)
