from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Callable

from ..errors import ConfigurationError

# Returns an error message, or None when the value is acceptable.
Validator = Callable[[Any], "str | None"]


def _normalize_name(name: Any) -> str:
    key = str(name).strip()
    if not key:
        raise ConfigurationError("configuration attribute name cannot be empty")
    return key


@dataclass
class ConfigOption:
    """A single leaf attribute in a configuration tree."""

    name: str
    types: tuple[type, ...] | None = None
    default: Any = None
    required: bool = False
    validate: Validator | None = None

    def check(self, value: Any, path: str) -> None:
        # None is always assignable; required-ness is reported by Configuration.missing_required().
        if value is None:
            return
        if self.types and not isinstance(value, self.types):
            expected = " or ".join(t.__name__ for t in self.types)
            raise ConfigurationError(f"{path} must be {expected}, got {type(value).__name__}")
        if self.validate is not None:
            message = self.validate(value)
            if message:
                raise ConfigurationError(f"{path}: {message}")


class ConfigurationBuilder:
    """Declarative description of a configuration tree.

    Leaves are declared with `config()`, nested nodes with `namespace()` (or
    `config(name, children=fn)`). `build()` produces a fresh `Configuration`
    each time; `finalize()` also locks the result against structural changes.
    """

    def __init__(self) -> None:
        self._entries: dict[str, ConfigOption | ConfigurationBuilder] = {}

    @property
    def entries(self) -> dict[str, ConfigOption | ConfigurationBuilder]:
        return dict(self._entries)

    def config(
        self,
        name: str,
        *,
        types: type | tuple[type, ...] | None = None,
        default: Any = None,
        required: bool = False,
        validate: Validator | None = None,
        children: Callable[[ConfigurationBuilder], None] | None = None,
    ) -> ConfigOption | ConfigurationBuilder:
        key = _normalize_name(name)
        if children is not None:
            node = self.namespace(key)
            children(node)
            return node

        if isinstance(types, type):
            types = (types,)
        if default is not None and types and not isinstance(default, types):
            raise ConfigurationError(f"default for {key} does not match its declared types")
        option = ConfigOption(name=key, types=types, default=default, required=required, validate=validate)
        self._entries[key] = option
        return option

    def namespace(self, name: str) -> ConfigurationBuilder:
        key = _normalize_name(name)
        existing = self._entries.get(key)
        if isinstance(existing, ConfigurationBuilder):
            return existing
        node = ConfigurationBuilder()
        self._entries[key] = node
        return node

    def attach(self, name: str, builder: ConfigurationBuilder) -> None:
        """Mount an existing builder (e.g. a plugin's declared options) under `name`."""
        self._entries[_normalize_name(name)] = builder

    def build(self, path: str = "config") -> Configuration:
        config = Configuration(path)
        for key, entry in self._entries.items():
            if isinstance(entry, ConfigurationBuilder):
                config._attach_namespace(key, entry.build(f"{path}.{key}"))
            else:
                config._attach_option(entry)
        return config

    def finalize(self, path: str = "config") -> Configuration:
        config = self.build(path)
        config.finalize()
        return config


class Configuration:
    """Attribute-style view over a built configuration tree.

    Leaf values may be reassigned at any time (subject to type checks and
    validators). Attributes and namespaces can only be added before
    `finalize()`.
    """

    def __init__(self, path: str = "config") -> None:
        object.__setattr__(self, "_path", path)
        object.__setattr__(self, "_options", {})
        object.__setattr__(self, "_values", {})
        object.__setattr__(self, "_namespaces", {})
        object.__setattr__(self, "_finalized", False)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._namespaces:
            return self._namespaces[name]
        if name in self._values:
            return self._values[name]
        raise AttributeError(f"{self._path} has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        option = self._options.get(name)
        if option is None:
            if name in self._namespaces:
                raise ConfigurationError(f"{self._path}.{name} is a namespace and cannot be assigned")
            raise AttributeError(f"{self._path} has no attribute {name!r}")
        option.check(value, f"{self._path}.{name}")
        self._values[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._values or name in self._namespaces

    def __repr__(self) -> str:
        return f"Configuration({self._path!r}, finalized={self._finalized})"

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _ensure_open(self, name: str) -> None:
        if self._finalized:
            raise ConfigurationError(f"cannot add {self._path}.{name}: configuration is finalized")
        if name in self:
            raise ConfigurationError(f"{self._path}.{name} is already defined")

    def _attach_option(self, option: ConfigOption) -> None:
        self._ensure_open(option.name)
        self._options[option.name] = option
        self._values[option.name] = copy.deepcopy(option.default)

    def _attach_namespace(self, name: str, child: Configuration) -> None:
        self._ensure_open(name)
        self._namespaces[name] = child

    def add_option(self, name: str, **kwargs: Any) -> None:
        if "children" in kwargs:
            raise ConfigurationError("add_option declares a leaf; use add_namespace for nested attributes")
        option = ConfigurationBuilder().config(name, **kwargs)
        if not isinstance(option, ConfigOption):
            raise ConfigurationError(f"{self._path}.{name} is not a leaf attribute")
        self._attach_option(option)

    def add_namespace(self, name: str) -> Configuration:
        key = _normalize_name(name)
        child = Configuration(f"{self._path}.{key}")
        self._attach_namespace(key, child)
        return child

    def finalize(self) -> Configuration:
        object.__setattr__(self, "_finalized", True)
        for child in self._namespaces.values():
            child.finalize()
        return self

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self._values)
        for key, child in self._namespaces.items():
            out[key] = child.to_dict()
        return out

    def missing_required(self) -> list[str]:
        missing = [
            f"{self._path}.{name}"
            for name, option in self._options.items()
            if option.required and self._values.get(name) is None
        ]
        for child in self._namespaces.values():
            missing.extend(child.missing_required())
        return missing
