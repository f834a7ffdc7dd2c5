"""Hook implementation for built-in sink plugins."""

from typing import Any

from jsonds.plugins.hookspecs import hookimpl


class JsondsBuiltinSinks:
    """Hook implementer for built-in sink plugins."""

    @hookimpl
    def jsonds_get_sinks(self) -> list[type[Any]]:
        """Return built-in sink plugin classes."""
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink
        from jsonds.plugins.sinks.memory_sink import MemorySink

        return [JSONLSink, MemorySink]


# Singleton instance for registration
builtin_sinks = JsondsBuiltinSinks()
