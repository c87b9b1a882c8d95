"""
=============================================================================
STATIC MOUNT CONFIGURATION
=============================================================================

A ``StaticConfig`` is built ONCE, when the static stage is mounted, and is
read-only afterwards. Every request handled by that mount shares it, from
any thread, without locking.

    config = StaticConfig.build(
        at="/public",
        from_="./priv/static",
        only=["images", "robots.txt"],
        gzip=True,
    )

=============================================================================
OPTIONS
=============================================================================

    at                              Mount point ("/public", "/assets/v1").
                                    Needs at least one segment.
    from_                           Where files live:
                                      "path/on/disk"          a directory
                                      PackageDir("myapp")     <myapp>/static
                                      ("myapp", "assets")     <myapp>/assets
    only                            Serve only when the first path segment
                                    equals one of these.
    only_matching                   Serve only when the first path segment
                                    starts with one of these.
    gzip / brotli                   Serve FILE.gz / FILE.br when present and
                                    accepted by the client.
    cache_control_for_etags         cache-control for etag responses
                                    (default "public"; None disables etags).
    cache_control_for_vsn_requests  cache-control when the query string
                                    starts with "vsn=" (default one year).
    etag_generation                 Custom etag: a callable, a
                                    (callable, args) tuple or a
                                    "module:function" string. Called as
                                    func(path, *args) -> str.
    headers                         Extra response headers. Names are
                                    lowercased and override computed ones.
    content_types                   Filename → content-type overrides.

=============================================================================
ENVIRONMENT
=============================================================================

``StaticConfig.from_env()`` reads the same options from ``STATIC_*``
variables (see the method docstring).

=============================================================================
"""

import importlib
import importlib.util
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from .http.request import split_path


DEFAULT_CACHE_CONTROL_FOR_ETAGS = "public"
DEFAULT_CACHE_CONTROL_FOR_VSN_REQUESTS = "public, max-age=31536000"

# Assets of a package live in this subdirectory unless told otherwise
DEFAULT_PACKAGE_SUBDIR = "static"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def load_target(target: str) -> Callable[..., Any]:
    """
    Import ``"package.module:function"`` and return the function.

    Dotted attributes after the colon are followed (``"mod:Class.method"``).
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Expected 'module:function', got {target!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Could not import {module_name!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ValueError(f"{module_name!r} has no attribute {attr_path!r}") from e

    if not callable(obj):
        raise ValueError(f"{target!r} is not callable")
    return obj


@dataclass(frozen=True)
class EtagGenerator:
    """
    A custom etag function with bound extra arguments.

    Invoked as ``func(path, *args)``; must return the etag string to send,
    quotes included.
    """

    func: Callable[..., str]
    args: Tuple[Any, ...] = ()

    def __call__(self, path: Union[str, Path]) -> str:
        return self.func(str(path), *self.args)

    @classmethod
    def coerce(cls, value: Any) -> Optional["EtagGenerator"]:
        if value is None or isinstance(value, EtagGenerator):
            return value
        if isinstance(value, str):
            return cls(load_target(value))
        if isinstance(value, tuple) and len(value) == 2:
            func, args = value
            if isinstance(func, str):
                func = load_target(func)
            if callable(func):
                return cls(func, tuple(args))
        if callable(value):
            return cls(value)
        raise TypeError(
            "etag_generation must be a callable, a (callable, args) tuple "
            f"or a 'module:function' string, got {value!r}"
        )


@dataclass(frozen=True)
class PackageDir:
    """Assets shipped inside an importable package."""

    package: str
    subdir: str = DEFAULT_PACKAGE_SUBDIR

    def resolve(self) -> Path:
        try:
            spec = importlib.util.find_spec(self.package)
        except (ImportError, ValueError) as e:
            raise ValueError(f"Cannot locate package {self.package!r}: {e}") from e
        if spec is None:
            raise ValueError(f"Cannot locate package {self.package!r}")

        if spec.submodule_search_locations:
            base = Path(next(iter(spec.submodule_search_locations)))
        elif spec.origin:
            base = Path(spec.origin).parent
        else:
            raise ValueError(f"Package {self.package!r} has no location on disk")

        return (base / self.subdir).resolve()


def _lowercase_names(headers: Mapping[str, str]) -> Dict[str, str]:
    """Header names are matched case-insensitively; store them lowercase."""
    return {name.lower() if isinstance(name, str) else name: value for name, value in headers.items()}


Source = Union[str, "os.PathLike[str]", PackageDir, Tuple[str, str]]


def resolve_root(from_: Source) -> Path:
    """Turn any accepted ``from_`` form into an absolute directory path."""
    if isinstance(from_, PackageDir):
        return from_.resolve()
    if isinstance(from_, tuple):
        if len(from_) != 2 or not all(isinstance(part, str) for part in from_):
            raise TypeError(f"from_ tuple must be (package, subdirectory), got {from_!r}")
        return PackageDir(*from_).resolve()
    if isinstance(from_, (str, os.PathLike)):
        return Path(from_).resolve()
    raise TypeError(f"from_ must be a path, a PackageDir or a (package, subdir) tuple, got {from_!r}")


@dataclass(frozen=True)
class StaticConfig:
    """
    Immutable configuration of one static mount.

    Prefer ``StaticConfig.build()``, which normalizes and validates; the
    field values here are already in their resolved form.
    """

    at: Tuple[str, ...]
    root: Path
    only: Tuple[str, ...] = ()
    only_matching: Tuple[str, ...] = ()
    gzip: bool = False
    brotli: bool = False
    cache_control_for_etags: Optional[str] = DEFAULT_CACHE_CONTROL_FOR_ETAGS
    cache_control_for_vsn_requests: Optional[str] = DEFAULT_CACHE_CONTROL_FOR_VSN_REQUESTS
    etag_generation: Optional[EtagGenerator] = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    content_types: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(
        cls,
        at: str,
        from_: Source,
        only: Iterable[str] = (),
        only_matching: Iterable[str] = (),
        gzip: bool = False,
        brotli: bool = False,
        cache_control_for_etags: Optional[str] = DEFAULT_CACHE_CONTROL_FOR_ETAGS,
        cache_control_for_vsn_requests: Optional[str] = DEFAULT_CACHE_CONTROL_FOR_VSN_REQUESTS,
        etag_generation: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        content_types: Optional[Mapping[str, str]] = None,
    ) -> "StaticConfig":
        """Normalize options, resolve the root directory and validate."""
        if not isinstance(at, str) or not at.startswith("/"):
            raise ValueError(f"at must be a path starting with '/', got {at!r}")
        if isinstance(only, str) or isinstance(only_matching, str):
            raise TypeError("only and only_matching must be lists of strings")

        config = cls(
            at=tuple(split_path(at)),
            root=resolve_root(from_),
            only=tuple(only),
            only_matching=tuple(only_matching),
            gzip=bool(gzip),
            brotli=bool(brotli),
            cache_control_for_etags=cache_control_for_etags,
            cache_control_for_vsn_requests=cache_control_for_vsn_requests,
            etag_generation=EtagGenerator.coerce(etag_generation),
            headers=MappingProxyType(_lowercase_names(headers or {})),
            content_types=MappingProxyType(dict(content_types or {})),
        )
        config.validate()
        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = "STATIC_") -> "StaticConfig":
        """
        Build a configuration from environment variables.

            STATIC_AT                              mount point (default "/static")
            STATIC_FROM                            directory (required)
            STATIC_ONLY                            comma-separated list
            STATIC_ONLY_MATCHING                   comma-separated list
            STATIC_GZIP / STATIC_BROTLI            1/true/yes/on or 0/false/no/off
            STATIC_CACHE_CONTROL_FOR_ETAGS         string ("none" disables)
            STATIC_CACHE_CONTROL_FOR_VSN_REQUESTS  string ("none" disables)
            STATIC_ETAG_GENERATION                 "module:function"

        Example:
            STATIC_FROM=./public STATIC_GZIP=1 python -m httpstatic /static/app.js
        """
        env = os.environ if environ is None else environ

        def get(name: str, default: Optional[str] = None) -> Optional[str]:
            return env.get(prefix + name, default)

        def get_list(name: str) -> Tuple[str, ...]:
            raw = get(name, "") or ""
            return tuple(part.strip() for part in raw.split(",") if part.strip())

        def get_bool(name: str) -> bool:
            raw = (get(name, "") or "").strip().lower()
            if raw in _TRUTHY:
                return True
            if raw in _FALSY:
                return False
            raise ValueError(f"{prefix}{name} must be a boolean, got {raw!r}")

        def get_cache_control(name: str, default: str) -> Optional[str]:
            raw = get(name)
            if raw is None:
                return default
            return None if raw.strip().lower() == "none" else raw

        from_ = get("FROM")
        if not from_:
            raise ValueError(f"{prefix}FROM must be set")

        return cls.build(
            at=get("AT", "/static"),
            from_=from_,
            only=get_list("ONLY"),
            only_matching=get_list("ONLY_MATCHING"),
            gzip=get_bool("GZIP"),
            brotli=get_bool("BROTLI"),
            cache_control_for_etags=get_cache_control(
                "CACHE_CONTROL_FOR_ETAGS", DEFAULT_CACHE_CONTROL_FOR_ETAGS
            ),
            cache_control_for_vsn_requests=get_cache_control(
                "CACHE_CONTROL_FOR_VSN_REQUESTS", DEFAULT_CACHE_CONTROL_FOR_VSN_REQUESTS
            ),
            etag_generation=get("ETAG_GENERATION") or None,
        )

    def validate(self) -> None:
        """Fail fast on settings that could never serve a request correctly."""
        if not self.at:
            raise ValueError("at must contain at least one path segment")
        if not self.root.is_absolute():
            raise ValueError(f"root must be absolute, got {self.root}")
        if not self.root.is_dir():
            raise ValueError(f"Static root directory does not exist: {self.root}")

        for name in ("only", "only_matching"):
            for entry in getattr(self, name):
                if not isinstance(entry, str) or not entry:
                    raise ValueError(f"{name} entries must be non-empty strings, got {entry!r}")

        for name in ("cache_control_for_etags", "cache_control_for_vsn_requests"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{name} must be a string or None, got {value!r}")

        for mapping_name in ("headers", "content_types"):
            for key, value in getattr(self, mapping_name).items():
                if not isinstance(key, str) or not isinstance(value, str):
                    raise ValueError(f"{mapping_name} must map strings to strings, got {key!r}: {value!r}")
