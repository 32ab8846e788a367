"""
Unit tests for request argument merging.
Run: pytest tests/test_options.py -v
"""

from justhttp.options import (
    DEFAULT_ARGUMENTS,
    SIZE_LIMIT_1MB,
    BasicAuthCredentials,
    RequestArguments,
    resolve,
)


FULL = RequestArguments(
    timeout_in_milliseconds=250,
    size_limit=512,
    basic_auth_credentials=BasicAuthCredentials(user="u", password="p"),
    query_params={"a": "1"},
)


class TestResolve:
    def test_no_overrides_is_default(self):
        assert resolve() == DEFAULT_ARGUMENTS
        assert resolve().size_limit == SIZE_LIMIT_1MB
        assert resolve().timeout_in_milliseconds is None
        assert resolve().timeout is None

    def test_fully_set_override_ignores_default(self):
        assert resolve(FULL) == resolve(DEFAULT_ARGUMENTS, FULL) == FULL

    def test_unset_fields_keep_defaults(self):
        merged = resolve(RequestArguments(timeout_in_milliseconds=500))
        assert merged.timeout_in_milliseconds == 500
        assert merged.size_limit == SIZE_LIMIT_1MB
        assert merged.timeout == 0.5

    def test_later_override_wins(self):
        merged = resolve(RequestArguments(size_limit=10), RequestArguments(size_limit=20))
        assert merged.size_limit == 20

    def test_zero_values_do_not_erase(self):
        merged = resolve(
            FULL,
            RequestArguments(
                timeout_in_milliseconds=0,
                size_limit=0,
                basic_auth_credentials=BasicAuthCredentials(),
                query_params={},
            ),
        )
        assert merged == FULL

    def test_fields_merge_independently(self):
        merged = resolve(
            RequestArguments(timeout_in_milliseconds=100, query_params={"x": "1"}),
            RequestArguments(basic_auth_credentials=BasicAuthCredentials("a", "b")),
            RequestArguments(query_params={"y": "2"}),
        )
        assert merged.timeout_in_milliseconds == 100
        assert merged.basic_auth_credentials == BasicAuthCredentials("a", "b")
        assert merged.query_params == {"y": "2"}
        assert merged.size_limit == SIZE_LIMIT_1MB

    def test_resolve_does_not_mutate_inputs(self):
        first = RequestArguments(query_params={"x": "1"})
        resolve(first, RequestArguments(query_params={"y": "2"}))
        assert first.query_params == {"x": "1"}
        assert DEFAULT_ARGUMENTS.query_params is None


class TestFromDict:
    def test_full_mapping(self):
        args = RequestArguments.from_dict({
            "timeout_in_milliseconds": 1500,
            "size_limit": 2048,
            "basic_auth": {"user": "svc", "password": "secret"},
            "query_params": {"env": "staging", "page": 2},
        })
        assert args == RequestArguments(
            timeout_in_milliseconds=1500,
            size_limit=2048,
            basic_auth_credentials=BasicAuthCredentials("svc", "secret"),
            query_params={"env": "staging", "page": "2"},
        )

    def test_empty_mapping_is_unset(self):
        assert RequestArguments.from_dict({}) == RequestArguments()
