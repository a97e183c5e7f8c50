"""
Service responsible for turning locally declared entity classes into IDL
entity definitions, one independent conversion per declaration.
"""
import importlib.util
import inspect
import sys
from pathlib import Path
from typing import Iterable, List, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from ..config import Config
from ..converter import BatchItemError, ConversionError, create_conversion_context
from ..converter.python import PythonConversionState, PythonConverterStrategy
from ..declarations import get_tags, is_entity
from ..models.idl import ObjectC3Type

logger = structlog.get_logger(__name__)


class EntityConversionResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    entities: List[ObjectC3Type] = Field(default_factory=list)
    errors: List[BatchItemError] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0


class EntityConverterService:
    """
    Converts entity declarations to IDL.
    A failing declaration is recorded and skipped, the rest of the batch still converts.
    """

    def __init__(self, app_config: Config):
        self.app_config = app_config
        self.logger = logger.bind(service="EntityConverterService")

    def convert_entities(self, declarations: Iterable[type], namespace: Optional[str] = None) -> EntityConversionResult:
        result = EntityConversionResult()
        for declaration in declarations:
            if not is_entity(declaration):
                continue

            name = getattr(declaration, "__qualname__", repr(declaration))
            # fresh context per declaration, a failure must not leak state into the next one
            context = create_conversion_context(
                PythonConverterStrategy(PythonConversionState(namespace), logger=self.logger),
                max_depth=self.app_config.conversion.max_depth,
            )
            try:
                converted = context.convert(declaration)
            except ConversionError as e:
                # already logged by the context
                result.errors.append(BatchItemError(declaration_name=name, error=e))
                continue

            if not isinstance(converted, ObjectC3Type):
                result.errors.append(BatchItemError(
                    declaration_name=name,
                    error=ConversionError(f"Entity {name} did not convert to an object type"),
                ))
                self.logger.error("Entity did not convert to an object type", declaration=name, converted_type=converted.type)
                continue
            result.entities.append(converted)

        self.logger.info("Entity conversion finished", entities=len(result.entities), errors=len(result.errors))
        return result

    def discover_entities(self, path: Path) -> List[type]:
        """
        Imports every ``*.py`` file below ``path`` (or ``path`` itself when it is a file)
        and returns the tagged classes defined in them, in file then definition order.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Entity path does not exist: {path}")
        files = [path] if path.is_file() else sorted(p for p in path.rglob("*.py") if p.name != "__init__.py")

        found: List[type] = []
        for file in files:
            module = self._load_module(file)
            members = [member for _, member in inspect.getmembers(module, inspect.isclass)
                       if member.__module__ == module.__name__ and get_tags(member)]
            members.sort(key=_definition_line)
            self.logger.debug("Loaded declarations", file=str(file), declarations=[m.__qualname__ for m in members])
            found.extend(members)
        return found

    def _load_module(self, file: Path):
        module_name = f"_structures_entities_{file.stem}_{abs(hash(str(file.resolve())))}"
        spec = importlib.util.spec_from_file_location(module_name, file)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load declarations from {file}")
        module = importlib.util.module_from_spec(spec)
        # dataclasses and get_type_hints resolve names through sys.modules
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            del sys.modules[module_name]
            self.logger.error("Failed to import declarations", file=str(file))
            raise
        return module


def _definition_line(cls: type) -> int:
    try:
        return inspect.getsourcelines(cls)[1]
    except (OSError, TypeError):
        return 0
