"""
Statements generated from IDL trees, consumed by code emitters.
"""
import abc
from typing import List, Tuple

from pydantic import Field

from ...models.common import BasePydanticModel


class Statement(BasePydanticModel, abc.ABC):
    model_config = {"frozen": True}

    @abc.abstractmethod
    def render(self) -> str:
        pass

    def flatten(self) -> List["Statement"]:
        return [self]

class AssignmentStatement(Statement):
    """Copies the value at ``rhs`` to ``lhs``."""
    lhs: str
    rhs: str

    def render(self) -> str:
        return f"{self.lhs} = {self.rhs}"

class TypeCheckStatement(Statement):
    """Checks the value at ``path`` is an instance of one of ``type_names``."""
    path: str
    type_names: Tuple[str, ...]

    def render(self) -> str:
        if len(self.type_names) == 1:
            return f"isinstance({self.path}, {self.type_names[0]})"
        return f"isinstance({self.path}, ({', '.join(self.type_names)}))"

class MembershipCheckStatement(Statement):
    """Checks the value at ``path`` is one of ``values``."""
    path: str
    values: Tuple[str, ...]

    def render(self) -> str:
        return f"{self.path} in {self.values!r}"

class CompositeStatement(Statement):
    """Statements generated for the members of an object, in declaration order."""
    statements: List[Statement] = Field(default_factory=list)

    def render(self) -> str:
        return "\n".join(statement.render() for statement in self.flatten())

    def flatten(self) -> List[Statement]:
        ret: List[Statement] = []
        for statement in self.statements:
            ret.extend(statement.flatten())
        return ret
