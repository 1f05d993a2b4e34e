from __future__ import annotations
import abc
import dataclasses
import itertools
from typing import Optional


class TypeCheckError(Exception):
    pass


class Type(abc.ABC):
    def resolve(self) -> Type:
        return self


@dataclasses.dataclass(frozen=True)
class IntType(Type):
    def __str__(self):
        return "Int"


@dataclasses.dataclass(frozen=True)
class DoubleType(Type):
    def __str__(self):
        return "Double"


@dataclasses.dataclass(frozen=True)
class StringType(Type):
    def __str__(self):
        return "String"


@dataclasses.dataclass(frozen=True)
class CharType(Type):
    def __str__(self):
        return "Char"


@dataclasses.dataclass(frozen=True)
class UnitType(Type):
    def __str__(self):
        return "Unit"


@dataclasses.dataclass(frozen=True)
class BoolType(Type):
    def __str__(self):
        return "Bool"


PRIMITIVES = (IntType, DoubleType, StringType, CharType, UnitType, BoolType)


@dataclasses.dataclass(frozen=True)
class FuncType(Type):
    arg: Type
    ret: Type

    def __str__(self):
        match self.arg.resolve():
            case FuncType():
                return f"({self.arg}) -> {self.ret}"
            case _:
                return f"{self.arg} -> {self.ret}"


@dataclasses.dataclass(frozen=True)
class UserType(Type):
    name: str
    args: tuple[Type, ...] = ()

    def __init__(self, name: str, args=()):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "args", tuple(args))

    def __str__(self):
        if not self.args:
            return self.name
        return " ".join([self.name, *map(_atomic_str, self.args)])


def _atomic_str(t: Type) -> str:
    match t.resolve():
        case FuncType():
            return f"({t})"
        case UserType(_, args) if args:
            return f"({t})"
        case _:
            return str(t)


_fresh_ids = itertools.count()


class TypeVar(Type):
    """A unification variable.

    Each variable has a process-wide unique id. Its binding is written at most
    once; after that the variable is an alias for whatever it is bound to.
    """

    __match_args__ = ("id",)

    def __init__(self):
        self.id = next(_fresh_ids)
        self.type: Optional[Type] = None

    def is_fresh(self) -> bool:
        return self.type is None

    def set_type(self, ty: Type):
        if self.type is not None:
            raise RuntimeError(f"type variable t{self.id} is already bound to {self.type}")
        self.type = ty

    def resolve(self) -> Type:
        t = self
        while isinstance(t, TypeVar) and t.type is not None:
            t = t.type
        return t

    def __eq__(self, other):
        return isinstance(other, TypeVar) and self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        if self.type is None:
            return f"TypeVar(t{self.id})"
        return f"TypeVar(t{self.id} := {self.type!r})"

    def __str__(self):
        t = self.resolve()
        if isinstance(t, TypeVar):
            return f"t{t.id}"
        return str(t)


def resolve(t: Type) -> Type:
    return t.resolve()


def zonk(t: Type) -> Type:
    """Replace every bound variable in t by what it is bound to, all the way down."""
    match t.resolve():
        case FuncType(arg, ret):
            return FuncType(zonk(arg), zonk(ret))
        case UserType(name, args):
            return UserType(name, [zonk(a) for a in args])
        case other:
            return other


@dataclasses.dataclass(frozen=True)
class TypeScheme:
    bounded: frozenset[int]
    body: Type

    @staticmethod
    def mono(body: Type) -> TypeScheme:
        return TypeScheme(frozenset(), body)

    def __str__(self):
        if not self.bounded:
            return str(self.body)
        quantified = " ".join(f"t{i}" for i in sorted(self.bounded))
        return f"forall {quantified}. {self.body}"


@dataclasses.dataclass(frozen=True)
class Tag:
    name: str
    index: int
    bounded: frozenset[int]
    arg_types: tuple[Type, ...]
    result_type: UserType

    @property
    def arity(self) -> int:
        return len(self.arg_types)

    def __str__(self):
        args = ", ".join(map(str, self.arg_types))
        return f"{self.name}#{self.index}({args}) : {self.result_type}"
