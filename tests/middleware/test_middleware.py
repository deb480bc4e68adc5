import httpx
import pytest

from typed_endpoints import (
    DecodeFailure,
    DecodeSuccess,
    EndpointBuilder,
    HookSequences,
    Middleware,
    RequestSpec,
    TransportError,
)


@pytest.fixture
def request_spec() -> RequestSpec:
    return RequestSpec(url="https://api.example.com/things/1", method="GET")


class TestHookSequences:
    def test_from_hooks_builds_single_element_sequences(self):
        def created(request):
            return None

        sequences = HookSequences.from_hooks({"on_created": created})

        assert sequences.on_created == (created,)
        assert sequences.on_success == ()
        assert sequences.on_failure == ()
        assert sequences.on_settled == ()

    def test_concat_appends_and_leaves_target_untouched(self):
        def first():
            pass

        def second():
            pass

        target = HookSequences.from_hooks({"on_settled": first})
        source = HookSequences.from_hooks({"on_settled": second})

        combined = HookSequences.concat(target, source)

        assert combined.on_settled == (first, second)
        assert target.on_settled == (first,)


class TestMiddleware:
    class TestComposition:
        def test_extend_does_not_change_base(self, transport_factory):
            base = Middleware.create(on_settled=lambda: None, transport=transport_factory())

            extended = Middleware.extend(base, on_settled=lambda: None)

            assert len(base.hooks.on_settled) == 1
            assert len(extended.hooks.on_settled) == 2

        def test_extend_inherits_transport(self, transport_factory, request_spec):
            transport = transport_factory()
            base = Middleware.create(transport=transport)

            Middleware.extend(base).send(request_spec)

            assert transport.requests == [request_spec]

        def test_extend_can_override_transport(self, transport_factory, request_spec):
            base_transport = transport_factory()
            override = transport_factory(status_code=204)
            base = Middleware.create(transport=base_transport)

            response = Middleware.extend(base, transport=override).send(request_spec)

            assert response.status_code == 204
            assert base_transport.requests == []

    class TestOnCreated:
        def test_hooks_run_in_order_and_thread_the_request(
            self, transport_factory, request_spec
        ):
            calls = []

            def h1(request: RequestSpec) -> RequestSpec:
                calls.append(("h1", request.url))
                return request.replace(url="https://api.example.com/things/2")

            def h2(request: RequestSpec) -> None:
                calls.append(("h2", request.url))

            transport = transport_factory()
            middleware = Middleware.extend(
                Middleware.create(on_created=h1, transport=transport), on_created=h2
            )

            middleware.send(request_spec)

            assert calls == [
                ("h1", "https://api.example.com/things/1"),
                ("h2", "https://api.example.com/things/2"),
            ]
            assert transport.requests[0].url == "https://api.example.com/things/2"

        def test_returning_none_keeps_the_request(self, transport_factory, request_spec):
            seen = []
            transport = transport_factory()
            middleware = Middleware.extend(
                Middleware.create(on_created=lambda request: None, transport=transport),
                on_created=seen.append,
            )

            middleware.send(request_spec)

            assert seen == [request_spec]
            assert transport.requests == [request_spec]

    class TestOnSuccess:
        def test_hooks_may_replace_the_response(self, transport_factory, request_spec):
            replacement = httpx.Response(202)
            seen = []

            middleware = Middleware.extend(
                Middleware.create(
                    on_success=lambda response: replacement,
                    transport=transport_factory(),
                ),
                on_success=lambda response: seen.append(response.status_code),
            )

            response = middleware.send(request_spec)

            assert response is replacement
            assert seen == [202]

        def test_not_called_on_failure(self, transport_factory, request_spec):
            seen = []
            middleware = Middleware.create(
                on_success=seen.append,
                transport=transport_factory(error=TransportError("down")),
            )

            with pytest.raises(TransportError):
                middleware.send(request_spec)

            assert seen == []

    class TestOnFailure:
        def test_transport_error_is_observed_and_reraised(
            self, transport_factory, request_spec
        ):
            error = TransportError("connection refused")
            seen = []
            middleware = Middleware.create(
                on_failure=seen.append, transport=transport_factory(error=error)
            )

            with pytest.raises(TransportError) as exc_info:
                middleware.send(request_spec)

            assert exc_info.value is error
            assert seen == [error]

        def test_replacement_error_is_raised(self, transport_factory, request_spec):
            original = TransportError("connection refused")
            replacement = RuntimeError("service unavailable")
            middleware = Middleware.create(
                on_failure=lambda failure: replacement,
                transport=transport_factory(error=original),
            )

            with pytest.raises(RuntimeError) as exc_info:
                middleware.send(request_spec)

            assert exc_info.value is replacement
            assert exc_info.value.__cause__ is original

        def test_replacements_are_threaded_in_order(self, transport_factory, request_spec):
            seen = []

            def wrap(failure):
                seen.append(failure)
                return ValueError(f"wrapped {failure}")

            middleware = Middleware.extend(
                Middleware.create(on_failure=wrap, transport=transport_factory(error=KeyError("k"))),
                on_failure=seen.append,
            )

            with pytest.raises(ValueError, match="wrapped"):
                middleware.send(request_spec)

            assert isinstance(seen[0], KeyError)
            assert isinstance(seen[1], ValueError)

        def test_created_hook_errors_reach_failure_hooks(
            self, transport_factory, request_spec
        ):
            transport = transport_factory()
            seen = []

            def broken(request):
                raise LookupError("no token")

            middleware = Middleware.create(
                on_created=broken, on_failure=seen.append, transport=transport
            )

            with pytest.raises(LookupError):
                middleware.send(request_spec)

            assert transport.requests == []
            assert isinstance(seen[0], LookupError)

        def test_success_hook_errors_reach_failure_hooks(
            self, transport_factory, request_spec
        ):
            seen = []

            def reject(response):
                raise ValueError("unexpected status")

            middleware = Middleware.create(
                on_success=reject, on_failure=seen.append, transport=transport_factory()
            )

            with pytest.raises(ValueError):
                middleware.send(request_spec)

            assert isinstance(seen[0], ValueError)

        def test_non_exception_replacement_is_a_type_error(
            self, transport_factory, request_spec
        ):
            middleware = Middleware.create(
                on_failure=lambda failure: "not an exception",
                transport=transport_factory(error=KeyError("k")),
            )

            with pytest.raises(TypeError, match="expected an exception"):
                middleware.send(request_spec)

    class TestOnSettled:
        def test_runs_once_after_success(self, transport_factory, request_spec):
            calls = []
            middleware = Middleware.extend(
                Middleware.create(
                    on_settled=lambda: calls.append("base"), transport=transport_factory()
                ),
                on_settled=lambda: calls.append("extension"),
            )

            middleware.send(request_spec)

            assert calls == ["base", "extension"]

        def test_runs_once_after_failure(self, transport_factory, request_spec):
            calls = []
            middleware = Middleware.create(
                on_failure=lambda failure: calls.append("failure"),
                on_settled=lambda: calls.append("settled"),
                transport=transport_factory(error=TransportError("down")),
            )

            with pytest.raises(TransportError):
                middleware.send(request_spec)

            assert calls == ["failure", "settled"]

    class TestPhaseOrder:
        def test_phases_run_in_order(self, request_spec):
            calls = []

            def transport(request):
                calls.append("dispatch")
                return httpx.Response(200)

            middleware = Middleware.create(
                on_created=lambda request: calls.append("created"),
                on_success=lambda response: calls.append("success"),
                on_failure=lambda failure: calls.append("failure"),
                on_settled=lambda: calls.append("settled"),
                transport=transport,
            )

            middleware.send(request_spec)

            assert calls == ["created", "dispatch", "success", "settled"]

    class TestCall:
        def test_call_decodes_json_body(self, transport_factory, base_url):
            transport = transport_factory(json={"id": 42})
            endpoint = (
                EndpointBuilder.base(base_url)
                .url("things/{id}")
                .returns(dict[str, int])
                .build()
            )

            result = Middleware.create(transport=transport).call(endpoint, {"id": "42"})

            assert result == DecodeSuccess({"id": 42})
            assert transport.requests[0].url == "https://api.example.com/things/42"

        def test_call_passes_body_arguments(self, transport_factory, base_url):
            transport = transport_factory(json={"ok": True})
            endpoint = (
                EndpointBuilder.base(base_url)
                .url("login")
                .method("POST")
                .expects(lambda login, password: {"login": login, "password": password})
                .build()
            )

            Middleware.create(transport=transport).call(endpoint, {}, "user", "pw")

            assert transport.requests[0].body == '{"login":"user","password":"pw"}'

        def test_decode_failure_is_returned(self, transport_factory, base_url):
            endpoint = EndpointBuilder.base(base_url).url("x").returns(int).build()

            result = Middleware.create(
                transport=transport_factory(json={"not": "an int"})
            ).call(endpoint)

            assert isinstance(result, DecodeFailure)

        def test_invalid_json_is_a_decode_failure(self, transport_factory, base_url):
            endpoint = EndpointBuilder.base(base_url).url("x").build()

            result = Middleware.create(
                transport=transport_factory(content=b"<html>")
            ).call(endpoint)

            assert isinstance(result, DecodeFailure)
            assert "not valid JSON" in result.error

        def test_empty_body_decodes_none(self, transport_factory, base_url):
            endpoint = EndpointBuilder.base(base_url).url("x").build()

            result = Middleware.create(
                transport=transport_factory(status_code=204)
            ).call(endpoint)

            assert result == DecodeSuccess(None)
