"""Error Builders

Ergonomic constructors for registry and loader failures.
Each builder returns an `Err` ready to hand back to the caller.
"""
from __future__ import annotations

from pathlib import Path

from .types import Err, LoadError, LoadErrorKind, RegistryError, RegistryErrorCode


# =============================================================================
# Registry Errors
# =============================================================================

def duplicate_name(name: str) -> Err[RegistryError]:
    return Err(RegistryError(
        code=RegistryErrorCode.DUPLICATE_NAME,
        message=f"schema '{name}' already registered",
        name=name,
    ))


def schema_not_found(name: str) -> Err[RegistryError]:
    return Err(RegistryError(
        code=RegistryErrorCode.SCHEMA_NOT_FOUND,
        message=f"schema '{name}' not found",
        name=name,
    ))


# =============================================================================
# Loader Errors
# =============================================================================

def load_error(kind: LoadErrorKind, message: str, path: Path | None = None) -> LoadError:
    """Create a loader error record (not wrapped; loaders aggregate them)."""
    return LoadError(kind=kind, message=message, path=path)


def io_error(path: Path, cause: OSError) -> LoadError:
    return load_error(LoadErrorKind.IO, f"failed to read: {cause.strerror or cause}", path)


def parse_error(path: Path, detail: str) -> LoadError:
    return load_error(LoadErrorKind.PARSE, f"failed to parse: {detail}", path)


def document_error(path: Path, detail: str) -> LoadError:
    return load_error(LoadErrorKind.SCHEMA, f"invalid schema document: {detail}", path)


def invalid_file_name(path: Path) -> LoadError:
    return load_error(LoadErrorKind.INVALID_FILE_NAME, "file name has no usable stem", path)


def registration_failed(path: Path, error: RegistryError) -> LoadError:
    return load_error(LoadErrorKind.REGISTRY, error.message, path)
