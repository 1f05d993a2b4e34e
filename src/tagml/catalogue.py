from typing import Mapping

from tagml import abstract_syntax as ast
from tagml.bindings import Bindings
from tagml.type_impls import Type, TypeVar, FuncType, UserType, Tag


def build_arities(typedef: ast.TypeDefinition) -> Bindings[int]:
    arities = Bindings()
    for item in typedef.items:
        arities = arities.extend(item.name, len(item.params))
    return arities


def build_tags(typedef: ast.TypeDefinition) -> Bindings[Tag]:
    tags = Bindings()
    for item in typedef.items:
        tags = item_tags(item).append(tags)
    return tags


def item_tags(item: ast.TypeItem) -> Bindings[Tag]:
    """One Tag per declaration of the item, numbered in declaration order.

    The item's type parameters are replaced by fresh variables, which every
    tag of the item quantifies over.
    """
    variables = [TypeVar() for _ in item.params]
    params = dict(zip(item.params, variables))
    bounded = frozenset(v.id for v in variables)
    tags = Bindings()
    for index, decl in enumerate(item.tags):
        arg_types = tuple(map_type_params(t, params) for t in decl.args)
        result_type = UserType(item.name, variables)
        tags = tags.extend(decl.name, Tag(decl.name, index, bounded, arg_types, result_type))
    return tags


def map_type_params(t: Type, params: Mapping[str, TypeVar]) -> Type:
    # only bare zero-argument references are parameters; `a Int` stays a user type
    match t.resolve():
        case UserType(name, ()) if name in params:
            return params[name]
        case UserType(name, args):
            return UserType(name, [map_type_params(a, params) for a in args])
        case FuncType(arg, ret):
            return FuncType(map_type_params(arg, params), map_type_params(ret, params))
        case other:
            return other
