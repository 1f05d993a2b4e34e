from __future__ import annotations

import abc
import dataclasses
from typing import Any, Optional

from tagml.type_impls import Type, TypeVar


def type_slot():
    return dataclasses.field(default_factory=TypeVar, compare=False)


class AstNode(abc.ABC):
    pass


class ToplevelItem(AstNode):
    pass


class Expression(AstNode):
    pass


class Pattern(AstNode):
    pass


@dataclasses.dataclass
class Literal(Expression):
    """Integer, double, string, unit (None) or boolean constant."""

    val: Any

    def __str__(self):
        match self.val:
            case bool():
                return "true" if self.val else "false"
            case None:
                return "()"
            case str():
                return f'"{self.val}"'
            case _:
                return str(self.val)


@dataclasses.dataclass
class Char(Expression):
    val: str

    def __str__(self):
        return f"'{self.val}'"


@dataclasses.dataclass
class TagExpr(Expression):
    """Construction of a tagged value, `Name(args...)`.

    The type checker stores the position of the tag within its type in `index`.
    """

    name: str
    args: list[Expression] = dataclasses.field(default_factory=list)
    index: Optional[int] = dataclasses.field(default=None, compare=False)

    def __str__(self):
        return f"{self.name}({', '.join(map(str, self.args))})"


@dataclasses.dataclass
class Reference(Expression):
    var: str
    type: Type = type_slot()

    def __str__(self):
        return self.var


@dataclasses.dataclass
class Function(Expression):
    var: str
    body: Expression
    arg_type: Type = type_slot()

    def __str__(self):
        return f"({self.var}: {self.arg_type}) -> {self.body}"


@dataclasses.dataclass
class Application(Expression):
    fun: Expression
    arg: Expression

    def __str__(self):
        match self.fun:
            case Reference() | TagExpr() | Application():
                return f"{self.fun}({self.arg})"
            case _:
                return f"({self.fun})({self.arg})"


@dataclasses.dataclass
class Conditional(Expression):
    condition: Expression
    consequence: Expression
    alternative: Expression

    def __str__(self):
        return f"if {self.condition} then {self.consequence} else {self.alternative}"


@dataclasses.dataclass
class Match(Expression):
    """`match expr as pat then consequence else alternative`

    Variables bound by the pattern are visible in the consequence only.
    """

    expr: Expression
    pat: Pattern
    consequence: Expression
    alternative: Expression

    def __str__(self):
        return (
            f"match {self.expr} as {self.pat} then {self.consequence} else {self.alternative}"
        )


@dataclasses.dataclass
class Let(Expression):
    var: str
    val: Expression
    body: Expression

    def __str__(self):
        return f"let {self.var} = {self.val} in {self.body}"


@dataclasses.dataclass
class WildcardPattern(Pattern):
    type: Type = type_slot()

    def __str__(self):
        return "_"


@dataclasses.dataclass
class BindingPattern(Pattern):
    var: str
    type: Type = type_slot()

    def __str__(self):
        return self.var


@dataclasses.dataclass
class TagDecl(AstNode):
    name: str
    args: list[Type] = dataclasses.field(default_factory=list)

    def __str__(self):
        if not self.args:
            return self.name
        return f"{self.name}({', '.join(map(str, self.args))})"


@dataclasses.dataclass
class TypeItem(AstNode):
    name: str
    params: list[str]
    tags: list[TagDecl]

    def __str__(self):
        head = " ".join([self.name, *self.params])
        return f"{head} = {' | '.join(map(str, self.tags))}"


@dataclasses.dataclass
class TypeDefinition(ToplevelItem):
    items: list[TypeItem]

    def __str__(self):
        return "type " + " and ".join(map(str, self.items))


@dataclasses.dataclass
class ToplevelDo(ToplevelItem):
    expr: Expression
    type: Type = type_slot()

    def __str__(self):
        return f"do {self.expr}"


@dataclasses.dataclass
class Script(AstNode):
    statements: list[ToplevelItem]
