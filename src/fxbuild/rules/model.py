"""Declarative module descriptor consumed by the host build tool."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Literal

ModuleType = Literal["cpp", "external"]


@dataclass(slots=True)
class ModuleRules:
    name: str
    module_type: ModuleType = "cpp"
    private_dependency_module_names: list[str] = field(default_factory=list)
    public_dependency_module_names: list[str] = field(default_factory=list)
    public_include_path_module_names: list[str] = field(default_factory=list)
    dynamically_loaded_module_names: list[str] = field(default_factory=list)
    circularly_referenced_dependent_modules: list[str] = field(default_factory=list)
    definitions: list[str] = field(default_factory=list)
    public_library_paths: list[str] = field(default_factory=list)
    public_additional_libraries: list[str] = field(default_factory=list)

    def define(self, name: str, value: str | int) -> None:
        self.definitions.append(f"{name}={value}")

    def definition(self, name: str) -> str | None:
        prefix = f"{name}="
        for item in self.definitions:
            if item.startswith(prefix):
                return item[len(prefix) :]
        return None

    @property
    def links_libraries(self) -> bool:
        return bool(self.public_additional_libraries)

    def to_dict(self) -> dict[str, object]:
        return {item.name: _copy(getattr(self, item.name)) for item in fields(self)}


def _copy(value: object) -> object:
    if isinstance(value, list):
        return list(value)
    return value
