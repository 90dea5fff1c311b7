"""windmix, wind mixing and convection in an ocean LES"""

import importlib

# public name -> (module, attribute); resolved on first access to keep `import windmix` cheap
_LAZY_OBJECTS = {
    "__version__": ("windmix._version", "version"),
    "LESSetup": ("windmix.windmix", "LESSetup"),
    "LESState": ("windmix.state", "LESState"),
    "LESEngine": ("windmix.engine", "LESEngine"),
}

# shared instances, created once per process
_SINGLETON_FACTORIES = {
    "logger": ("windmix.logs", "setup_logging"),
    "runtime_settings": ("windmix.runtime", "RuntimeSettings"),
}


def _resolve(module_name, attr):
    try:
        return getattr(importlib.import_module(module_name), attr)
    except Exception as e:
        raise ImportError("Critical error during initial import") from e


def __getattr__(name):
    if name in _LAZY_OBJECTS:
        return _resolve(*_LAZY_OBJECTS[name])

    if name in _SINGLETON_FACTORIES:
        factory = _resolve(*_SINGLETON_FACTORIES[name])
        try:
            instance = factory()
        except Exception as e:
            raise ImportError("Critical error during initial import") from e

        globals()[name] = instance
        return instance

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(set(globals()) | set(_LAZY_OBJECTS) | set(_SINGLETON_FACTORIES))
