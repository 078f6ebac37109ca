"""Configuration module for direnum."""

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

EXCLUSIONS_ENV_VAR = "DIRENUM_DIRECTORY_EXCLUSIONS"
EXCLUSIONS_SEPARATOR = "|"


def _get_working_directory() -> Path:
    return Path.cwd()


def parse_exclusions(raw: str | None) -> tuple[str, ...]:
    """Split a ``|`` separated exclusion setting, dropping empty items."""
    if not raw:
        return ()
    return tuple(item for item in raw.split(EXCLUSIONS_SEPARATOR) if item)


@dataclass(frozen=True)
class ScannerConfig:
    exclusions: tuple[str, ...] = ()
    continue_on_permission_denied: bool = True
    continue_on_path_too_long: bool = True
    progress_interval: float = 60.0
    settle_interval: float = 10.0
    max_path_length: int = 4096
    max_workers: int | None = None

    def with_exclusions(self, extra: Iterable[str]) -> "ScannerConfig":
        merged = list(self.exclusions)
        for item in extra:
            if item and item not in merged:
                merged.append(item)
        return replace(self, exclusions=tuple(merged))


@dataclass(frozen=True)
class Config:
    report_dir: Path = field(default_factory=_get_working_directory)
    scanner: ScannerConfig = field(default_factory=ScannerConfig)

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> "Config":
        environ = os.environ if environ is None else environ
        exclusions = parse_exclusions(environ.get(EXCLUSIONS_ENV_VAR))
        return cls(scanner=ScannerConfig(exclusions=exclusions))
