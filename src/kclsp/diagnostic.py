"""
Compiler-side diagnostic model.

These are the values the KCL compiler hands to the language server: a
``Diagnostic`` with a severity ``Level``, an optional identifier and one or
more ``Message`` objects, each pointing at a span of source.  Lines are
1-based, columns 0-based.  Nothing here knows about LSP; see
:mod:`kclsp.handlers.diagnostics` for the conversion.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union


class Level(enum.Enum):
    ERROR = 'error'
    WARNING = 'warning'
    NOTE = 'note'
    SUGGESTIONS = 'suggestions'


class ErrorKind(enum.Enum):
    """Compiler error kinds.  Each value is the name reported to clients."""
    INVALID_SYNTAX = 'InvalidSyntax'
    TAB_ERROR = 'TabError'
    INDENTATION_ERROR = 'IndentationError'
    ILLEGAL_ARGUMENT_ERROR = 'IllegalArgumentError'
    CANNOT_FIND_MODULE = 'CannotFindModule'
    RECURSIVE_LOAD = 'RecursiveLoad'
    FLOAT_OVERFLOW = 'FloatOverflow'
    FLOAT_UNDERFLOW = 'FloatUnderflow'
    INT_OVERFLOW = 'IntOverflow'
    INVALID_DOCSTRING = 'InvalidDocstring'
    DEPRECATED = 'Deprecated'
    UNKNOWN_DECORATOR_ERROR = 'UnknownDecoratorError'
    INVALID_DECORATOR_TARGET = 'InvalidDecoratorTarget'
    INVALID_FORMAT_SPEC = 'InvalidFormatSpec'
    SCHEMA_CHECK_FAILURE = 'SchemaCheckFailure'
    UNIQUE_KEY_ERROR = 'UniqueKeyError'
    ATTRIBUTE_ERROR = 'AttributeError'
    VALUE_ERROR = 'ValueError'
    KEY_ERROR = 'KeyError'
    NAME_ERROR = 'NameError'
    TYPE_ERROR = 'TypeError'
    IMMUTABLE_ERROR = 'ImmutableError'
    MULTI_INHERIT_ERROR = 'MultiInheritError'
    CYCLE_INHERIT_ERROR = 'CycleInheritError'
    ILLEGAL_INHERIT_ERROR = 'IllegalInheritError'
    INDEX_SIGNATURE_ERROR = 'IndexSignatureError'
    COMPILE_ERROR = 'CompileError'
    EVALUATION_ERROR = 'EvaluationError'
    RECURSION_ERROR = 'RecursionError'
    PLAN_ERROR = 'PlanError'
    IMPORT_POSITION_ERROR = 'ImportPositionError'


class WarningKind(enum.Enum):
    """Compiler warning kinds.  Each value is the name reported to clients."""
    COMPILER_WARNING = 'CompilerWarning'
    UNUSED_IMPORT_WARNING = 'UnusedImportWarning'
    REIMPORT_WARNING = 'ReimportWarning'
    IMPORT_POSITION_WARNING = 'ImportPositionWarning'
    DEPRECATED_WARNING = 'DeprecatedWarning'


class Suggestions(enum.Enum):
    """Marker identifier for diagnostics that only carry suggestions."""
    SUGGESTIONS = 'suggestion'


DiagnosticId = Union[ErrorKind, WarningKind, Suggestions]


@dataclass(frozen=True)
class Position:
    filename: str
    line: int                    # 1-based
    column: int | None = None    # 0-based


@dataclass(frozen=True)
class Message:
    range: tuple[Position, Position]
    message: str
    suggested_replacement: tuple[str, ...] | None = None

    @property
    def filename(self) -> str:
        return self.range[0].filename


@dataclass
class Diagnostic:
    level: Level
    messages: list[Message] = field(default_factory=list)
    code: DiagnosticId | None = None

    @classmethod
    def new(
        cls,
        level: Level,
        message: str,
        range: tuple[Position, Position],
        code: DiagnosticId | None = None,
        suggested_replacement: tuple[str, ...] | None = None,
    ) -> Diagnostic:
        """Build a single-message diagnostic."""
        return cls(
            level=level,
            messages=[Message(range=range, message=message,
                              suggested_replacement=suggested_replacement)],
            code=code,
        )
