from functools import singledispatch
from typing import Mapping

from tagml.bindings import Bindings
from tagml.type_impls import Type, TypeVar, FuncType, UserType, TypeScheme, Tag


@singledispatch
def free_type_vars(x) -> frozenset[int]:
    """Ids of the unbound type variables occurring free in a type, scheme or environment."""
    raise NotImplementedError(x)


@free_type_vars.register
def _(t: Type) -> frozenset[int]:
    match t.resolve():
        case TypeVar(i):
            return frozenset([i])
        case FuncType(arg, ret):
            return free_type_vars(arg) | free_type_vars(ret)
        case UserType(_, args):
            return frozenset().union(*map(free_type_vars, args))
        case _:
            return frozenset()


@free_type_vars.register
def _(scheme: TypeScheme) -> frozenset[int]:
    return free_type_vars(scheme.body) - scheme.bounded


@free_type_vars.register
def _(env: Bindings) -> frozenset[int]:
    return frozenset().union(*map(free_type_vars, env.values()))


def generalize(env: Bindings[TypeScheme], t: Type) -> TypeScheme:
    return TypeScheme(free_type_vars(t) - free_type_vars(env), t)


def instantiate(scheme: TypeScheme) -> Type:
    if not scheme.bounded:
        return scheme.body
    return substitute(scheme.body, fresh_substitution(scheme.bounded))


def instantiate_tag(tag: Tag) -> Tag:
    subs = fresh_substitution(tag.bounded)
    return Tag(
        tag.name,
        tag.index,
        tag.bounded,
        tuple(substitute(t, subs) for t in tag.arg_types),
        substitute(tag.result_type, subs),
    )


def fresh_substitution(ids) -> dict[int, TypeVar]:
    return {i: TypeVar() for i in sorted(ids)}


def substitute(t: Type, subs: Mapping[int, Type]) -> Type:
    """Replace the unbound variables named in subs; everything else is kept."""
    match t.resolve():
        case TypeVar(i) as v:
            return subs.get(i, v)
        case FuncType(arg, ret):
            return FuncType(substitute(arg, subs), substitute(ret, subs))
        case UserType(name, args):
            return UserType(name, [substitute(a, subs) for a in args])
        case other:
            return other
