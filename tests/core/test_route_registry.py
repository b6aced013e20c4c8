"""Route Registry — tests for insert, lookup, overwrite and concurrent access.

Tests cover:
    - Inserted routes are found by exact (method, path)
    - Newest registration for a key wins
    - Bad entries rejected one by one, good ones still stored
    - No prefix/trailing-slash matching
    - Independent instances share nothing
    - Concurrent writers and readers never see a torn definition
"""

from concurrent.futures import ThreadPoolExecutor

from mockserver.core.route_registry import RouteRegistry
from mockserver.core.route_types import RouteDefinition, RouteKey


def test_lookup_on_empty_registry_returns_none():
    registry = RouteRegistry()
    assert registry.lookup("GET", "/anything") is None
    assert len(registry) == 0


def test_insert_then_lookup():
    registry = RouteRegistry()
    report = registry.insert([
        {"path": "/hello", "method": "GET", "response": "hi", "code": 200},
    ])
    assert report.inserted == 1
    assert report.ok
    assert registry.lookup("GET", "/hello") == RouteDefinition(200, b"hi")


def test_lookup_method_is_case_insensitive():
    registry = RouteRegistry()
    registry.insert([{"path": "/x", "method": "put"}])
    assert registry.lookup("put", "/x") is not None
    assert registry.lookup("PUT", "/x") is not None


def test_same_path_different_methods_are_distinct():
    registry = RouteRegistry()
    registry.insert([
        {"path": "/item", "method": "GET", "response": "read", "code": 200},
        {"path": "/item", "method": "POST", "response": "made", "code": 201},
    ])
    assert registry.lookup("GET", "/item").body == b"read"
    assert registry.lookup("POST", "/item").code == 201
    assert registry.lookup("DELETE", "/item") is None
    assert len(registry) == 2


def test_newest_registration_wins():
    registry = RouteRegistry()
    registry.insert([{"path": "/v", "response": "one", "code": 200}])
    registry.insert([{"path": "/v", "response": "two", "code": 202}])
    assert registry.lookup("GET", "/v") == RouteDefinition(202, b"two")
    assert len(registry) == 1


def test_later_entry_in_same_batch_wins():
    registry = RouteRegistry()
    registry.insert([
        {"path": "/v", "response": "first"},
        {"path": "/v", "response": "second"},
    ])
    assert registry.lookup("GET", "/v").body == b"second"


def test_mixed_batch_reports_per_entry():
    registry = RouteRegistry()
    report = registry.insert([
        {"path": "/good", "code": 200},
        {"method": "GET"},
        {"path": "/bad-code", "code": 700},
        "not-an-object",
        {"path": "/also-good", "method": "delete", "code": 204},
    ])
    assert report.inserted == 2
    assert [index for index, _ in report.accepted] == [0, 4]
    assert [index for index, _ in report.rejected] == [1, 2, 3]
    assert not report.ok
    assert registry.lookup("GET", "/good") is not None
    assert registry.lookup("DELETE", "/also-good") is not None
    assert registry.lookup("GET", "/bad-code") is None


def test_insert_accepts_prebuilt_pairs():
    registry = RouteRegistry()
    report = registry.insert([
        (RouteKey("GET", "/typed"), RouteDefinition(418, b"teapot")),
    ])
    assert report.inserted == 1
    assert registry.lookup("GET", "/typed").code == 418


def test_insert_rejects_invalid_prebuilt_pairs():
    registry = RouteRegistry()
    report = registry.insert([
        (RouteKey("BREW", "/typed"), RouteDefinition(200)),
        (RouteKey("GET", "typed"), RouteDefinition(200)),
        (RouteKey("GET", "/typed"), RouteDefinition(42)),
    ])
    assert report.inserted == 0
    assert len(report.rejected) == 3
    assert len(registry) == 0


def test_empty_batch_is_a_noop():
    registry = RouteRegistry()
    report = registry.insert([])
    assert report.inserted == 0
    assert report.ok


def test_no_prefix_or_trailing_slash_matching():
    registry = RouteRegistry()
    registry.insert([{"path": "/api"}])
    assert registry.lookup("GET", "/api/users") is None
    assert registry.lookup("GET", "/api/") is None
    assert registry.lookup("GET", "/ap") is None


def test_snapshot_is_sorted_copy():
    registry = RouteRegistry()
    registry.insert([
        {"path": "/b", "method": "POST"},
        {"path": "/a"},
        {"path": "/b", "method": "GET"},
    ])
    snapshot = registry.snapshot()
    assert [str(key) for key, _ in snapshot] == ["GET /a", "GET /b", "POST /b"]
    registry.insert([{"path": "/c"}])
    assert len(snapshot) == 3


def test_instances_are_independent():
    first, second = RouteRegistry(), RouteRegistry()
    first.insert([{"path": "/only-first"}])
    assert first.lookup("GET", "/only-first") is not None
    assert second.lookup("GET", "/only-first") is None


def test_concurrent_inserts_and_lookups_never_tear():
    registry = RouteRegistry()
    # body always mirrors the code, so a mixed pair would show up as a mismatch
    codes = [200, 201, 202, 404, 500, 503]

    def writer(i: int):
        code = codes[i % len(codes)]
        registry.insert([
            {"path": "/shared", "response": str(code), "code": code},
            {"path": f"/own/{i}", "code": code},
        ])

    def reader(_: int):
        seen = []
        for _ in range(50):
            definition = registry.lookup("GET", "/shared")
            if definition is not None:
                seen.append(definition)
        return seen

    with ThreadPoolExecutor(max_workers=16) as pool:
        writes = [pool.submit(writer, i) for i in range(200)]
        reads = [pool.submit(reader, i) for i in range(50)]
        for future in writes:
            future.result()
        observed = [d for future in reads for d in future.result()]

    for definition in observed:
        assert definition.body == str(definition.code).encode()
    assert len(registry) == 201
