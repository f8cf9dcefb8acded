"""
Unit tests for adapter composition.
"""

import pytest

from adaptd import AdapterChain, ConfigurationError, adapt
from adaptd.http import HTTPRequest, HTTPStatus


def tracing(name: str, trace: list):
    """Adapter that records entry and exit around the wrapped handler."""
    def adapter(handler):
        def traced(writer, request):
            trace.append(f"{name}-in")
            try:
                handler(writer, request)
            finally:
                trace.append(f"{name}-out")
        return traced
    return adapter


class TestAdapt:
    """Tests for adapt()."""

    def test_first_adapter_is_outermost(self, recorder):
        """Side effects run a0, a1, a2, base inward and reverse outward."""
        trace = []

        def base(writer, request):
            trace.append("base")

        handler = adapt(base, [tracing("a0", trace), tracing("a1", trace), tracing("a2", trace)])
        handler(recorder, HTTPRequest(method="GET", path="/"))

        assert trace == ["a0-in", "a1-in", "a2-in", "base", "a2-out", "a1-out", "a0-out"]

    def test_empty_adapters_is_identity(self):
        """With no adapters the base handler itself comes back."""
        def base(writer, request):
            writer.write("ok")

        assert adapt(base, []) is base
        assert adapt(base) is base

    def test_empty_adapters_behaves_like_base(self, run, call_log):
        """Identity law: same status, body and side effects."""
        base = call_log.handler("base", status=HTTPStatus.CREATED, body="made")
        request = HTTPRequest(method="POST", path="/items")

        direct = run(base, request)
        composed = run(adapt(base, ()), request)

        assert composed.status == direct.status == 201
        assert composed.body == direct.body == b"made"
        assert call_log.count("base") == 2

    def test_accepts_any_sequence(self, recorder):
        """Tuples and generators fold the same way as lists."""
        trace = []

        def base(writer, request):
            trace.append("base")

        handler = adapt(base, (tracing(n, trace) for n in ("x", "y")))
        handler(recorder, HTTPRequest(method="GET", path="/"))

        assert trace == ["x-in", "y-in", "base", "y-out", "x-out"]

    def test_construction_does_not_call_handlers(self, call_log):
        """Composing is pure: nothing runs until a request arrives."""
        adapt(call_log.handler("base"), [tracing("a", [])])
        assert call_log.calls == []

    def test_short_circuit_skips_inner(self, run, call_log):
        """An adapter that does not delegate stops the chain."""
        def reject(handler):
            def rejected(writer, request):
                writer.write_header(HTTPStatus.FORBIDDEN)
            return rejected

        trace = []
        handler = adapt(call_log.handler("base"), [tracing("outer", trace), reject, tracing("inner", trace)])
        response = run(handler, HTTPRequest(method="GET", path="/"))

        assert response.status == 403
        assert trace == ["outer-in", "outer-out"]
        assert call_log.calls == []


class TestAdapterChain:
    """Tests for AdapterChain builder."""

    def test_add_preserves_order(self, recorder):
        """Adapters added first end up outermost."""
        trace = []
        chain = AdapterChain().add(tracing("first", trace)).add(tracing("second", trace))

        handler = chain.wrap(lambda writer, request: trace.append("base"))
        handler(recorder, HTTPRequest(method="GET", path="/"))

        assert trace == ["first-in", "second-in", "base", "second-out", "first-out"]

    def test_use_adds_several(self):
        """use() is add() for each argument."""
        chain = AdapterChain()
        chain.use(tracing("a", []), tracing("b", []), tracing("c", []))
        assert len(chain) == 3
        assert len(list(chain)) == 3

    def test_wrap_freezes_chain(self):
        """Adding after wrap() is a configuration error."""
        chain = AdapterChain([tracing("a", [])])
        chain.wrap(lambda writer, request: None)

        assert chain.frozen
        with pytest.raises(ConfigurationError):
            chain.add(tracing("late", []))
        with pytest.raises(ConfigurationError):
            chain.use(tracing("late", []))

    def test_wrap_several_handlers(self, run):
        """One frozen chain can still wrap more than one handler."""
        def header(writer, request):
            writer.headers.set("X-Chain", "yes")

        chain = AdapterChain()
        chain.add(lambda handler: lambda writer, request: (header(writer, request), handler(writer, request)))

        first = chain.wrap(lambda writer, request: writer.write("one"))
        second = chain.wrap(lambda writer, request: writer.write("two"))

        request = HTTPRequest(method="GET", path="/")
        assert run(first, request).body == b"one"
        assert run(second, request).body == b"two"
        assert run(second, request).headers.get("X-Chain") == "yes"
