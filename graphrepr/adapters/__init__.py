from importlib import import_module, util

__all__ = ["available_backends", "load_adapter", "load_module"]

# name -> (pip_import_name, submodule)
_BACKENDS = {
    "networkx": ("networkx", ".networkx"),
}


def _is_installed(modname: str) -> bool:
    return util.find_spec(modname) is not None


def available_backends() -> dict:
    return {name: _is_installed(mod) for name, (mod, _) in _BACKENDS.items()}


def load_module(name: str):
    """Import the third-party library behind adapter ``name``."""
    if name not in _BACKENDS:
        raise ValueError(f"Unknown adapter '{name}'")
    modname, _ = _BACKENDS[name]
    if not _is_installed(modname):
        raise ModuleNotFoundError(
            f"Optional backend '{name}' is not installed. "
            f"Install with `pip install graphrepr[{name}]`."
        )
    return import_module(modname)


def load_adapter(name: str):
    """Return the adapter module for ``name`` (exposes ``to_<name>``/``from_<name>``)."""
    load_module(name)
    _, submod = _BACKENDS[name]
    return import_module(__name__ + submod)
