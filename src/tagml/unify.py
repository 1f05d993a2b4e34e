import dataclasses
import logging

from tagml.type_impls import Type, TypeVar, FuncType, UserType, TypeCheckError, PRIMITIVES

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class OccursViolation(TypeCheckError):
    var: TypeVar
    type: Type

    def __str__(self):
        return f"type error (occurs violation): t{self.var.id} occurs in {self.type}"


@dataclasses.dataclass
class UnificationFailure(TypeCheckError):
    left: Type
    right: Type

    def __str__(self):
        return f"type error (cannot unify): {self.left} with {self.right}"


def unify(a: Type, b: Type):
    a = a.resolve()
    b = b.resolve()

    match a, b:
        case TypeVar(i), TypeVar(j) if i == j:
            return
        case TypeVar(), _:
            bind(a, b)
        case _, TypeVar():
            bind(b, a)
        case FuncType(arg1, ret1), FuncType(arg2, ret2):
            unify(arg1, arg2)
            unify(ret1, ret2)
        case UserType(name1, args1), UserType(name2, args2):
            if name1 != name2 or len(args1) != len(args2):
                raise UnificationFailure(a, b)
            for x, y in zip(args1, args2):
                unify(x, y)
        case _ if isinstance(a, PRIMITIVES) and type(a) is type(b):
            return
        case _:
            raise UnificationFailure(a, b)


def bind(var: TypeVar, t: Type):
    if occurs(var.id, t):
        raise OccursViolation(var, t)
    logger.debug("bind t%d := %s", var.id, t)
    var.set_type(t)


def occurs(var_id: int, t: Type) -> bool:
    match t.resolve():
        case TypeVar(i):
            return i == var_id
        case FuncType(arg, ret):
            return occurs(var_id, arg) or occurs(var_id, ret)
        case UserType(_, args):
            return any(occurs(var_id, a) for a in args)
        case _:
            return False
