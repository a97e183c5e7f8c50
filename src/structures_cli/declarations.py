"""
Tags used to declare Structures entities as plain Python classes.

    from typing import Annotated
    from structures_cli.declarations import AutoGeneratedId, Long, entity
    from structures_cli.models import MultiTenancyType

    @entity(MultiTenancyType.SHARED)
    @dataclass
    class Person:
        id: Annotated[str | None, AutoGeneratedId]
        first_name: str
        visits: Long

Class level tags are attached with decorators, member level tags travel as
``typing.Annotated`` metadata.
"""
from typing import Annotated, Any, Callable, List, Optional, Union, get_args, get_origin

from dataclasses import dataclass

from .models.common import (
    AUTO_GENERATED_ID_TAG,
    ENTITY_TAG,
    NOT_INDEXED_TAG,
    MultiTenancyType,
    PrimitiveKind,
)

TAGS_ATTRIBUTE = "__structures_tags__"


@dataclass(frozen=True)
class Tag:
    """A declarative tag: a name plus an optional single positional argument."""
    name: str
    argument: Any = None


@dataclass(frozen=True)
class PrimitiveOverride:
    """``Annotated`` metadata selecting an IDL primitive Python has no distinct type for."""
    kind: PrimitiveKind


AutoGeneratedId = Tag(AUTO_GENERATED_ID_TAG)
NotIndexed = Tag(NOT_INDEXED_TAG)

Long = Annotated[int, PrimitiveOverride(PrimitiveKind.LONG)]
Short = Annotated[int, PrimitiveOverride(PrimitiveKind.SHORT)]
Byte = Annotated[int, PrimitiveOverride(PrimitiveKind.BYTE)]
Float = Annotated[float, PrimitiveOverride(PrimitiveKind.FLOAT)]
Double = Annotated[float, PrimitiveOverride(PrimitiveKind.DOUBLE)]
Char = Annotated[str, PrimitiveOverride(PrimitiveKind.CHAR)]


def add_tag(cls: type, tag: Tag) -> type:
    # tags live in the class' own namespace so subclasses do not inherit them
    tags = list(vars(cls).get(TAGS_ATTRIBUTE, ()))
    tags.append(tag)
    setattr(cls, TAGS_ATTRIBUTE, tuple(tags))
    return cls


def entity(multi_tenancy_type: Union[MultiTenancyType, str, type, None] = None) -> Union[type, Callable[[type], type]]:
    """Class decorator marking a class as an entity.

    Usable bare (``@entity``) or with a multi tenancy type
    (``@entity(MultiTenancyType.SHARED)``).
    """
    if isinstance(multi_tenancy_type, type):
        return add_tag(multi_tenancy_type, Tag(ENTITY_TAG))

    def decorator(cls: type) -> type:
        return add_tag(cls, Tag(ENTITY_TAG, multi_tenancy_type))
    return decorator


def not_indexed(cls: type) -> type:
    """Class decorator; nested objects of this type are stored but not indexed."""
    return add_tag(cls, NotIndexed)


def get_tags(declaration: Any) -> List[Tag]:
    """Tags attached to a class, or carried as metadata of an ``Annotated`` type."""
    if get_origin(declaration) is Annotated:
        return [meta for meta in get_args(declaration)[1:] if isinstance(meta, Tag)]
    if isinstance(declaration, type):
        return list(vars(declaration).get(TAGS_ATTRIBUTE, ()))
    return []


def find_tag(declaration: Any, name: str) -> Optional[Tag]:
    for tag in get_tags(declaration):
        if tag.name == name:
            return tag
    return None


def is_entity(declaration: Any) -> bool:
    return find_tag(declaration, ENTITY_TAG) is not None
