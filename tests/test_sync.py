"""Tests for the filter store and the URL synchronizer."""

from blog_catalog.catalog.filters import FilterStore
from blog_catalog.catalog.schemas import FilterState
from blog_catalog.catalog.sync import (
    FilterSynchronizer,
    MemoryLocation,
    SyncStatus,
    filter_state_from_params,
    params_from_filter_state,
    parse_query_string,
    to_query_string,
)


class TestFilterStore:
    def test_filter_changes_reset_page(self):
        store = FilterStore(FilterState(page=4))

        store.set_query("python")
        assert store.state.page == 1 and store.state.q == "python"

        store.set_page(3)
        store.set_category_ids(["c1"])
        assert store.state.page == 1

        store.set_page(3)
        store.set_sort("title", "asc")
        assert (store.state.sort_by, store.state.sort_order, store.state.page) == ("title", "asc", 1)

    def test_set_page_clamps(self):
        store = FilterStore()

        store.set_page(-5)

        assert store.state.page == 1

    def test_reset(self):
        store = FilterStore()
        store.set_author_id("a1")
        store.set_tag_ids(["t"])

        store.reset()

        assert store.state == FilterState()

    def test_listeners(self):
        store = FilterStore()
        seen = []
        unsubscribe = store.subscribe(seen.append)

        store.set_query("x")
        unsubscribe()
        store.set_query("y")

        assert [s.q for s in seen] == ["x"]


class TestParamMapping:
    def test_full_mapping(self):
        params = parse_query_string(
            "q=foo&categories=c1,c2&tags=t1&author=a1&sort=title&order=asc&page=3"
        )

        state = filter_state_from_params(params)

        assert state == FilterState(
            q="foo",
            category_ids=["c1", "c2"],
            tag_ids=["t1"],
            author_id="a1",
            sort_by="title",
            sort_order="asc",
            page=3,
        )

    def test_defaults_and_unknown_values(self):
        state = filter_state_from_params({"sort": "views", "order": "sideways"})

        assert (state.sort_by, state.sort_order, state.page) == ("date", "desc", 1)

    def test_page_parsing(self):
        assert filter_state_from_params({"page": "0"}).page == 1
        assert filter_state_from_params({"page": "-4"}).page == 1
        assert filter_state_from_params({"page": "7abc"}).page == 7
        assert filter_state_from_params({"page": "abc"}).page == 1

    def test_absent_fields_keep_base_values(self):
        base = FilterState(q="kept", author_id="a9", page=5)

        state = filter_state_from_params({}, base)

        assert state.q == "kept"
        assert state.author_id == "a9"
        assert state.page == 1

    def test_repeated_keys_are_ignored(self):
        params = parse_query_string("author=a1&author=a2&q=x")

        assert params["author"] == ["a1", "a2"]
        assert filter_state_from_params(params).author_id is None

    def test_serialise_skips_defaults(self):
        assert params_from_filter_state(FilterState()) == {"sort": "date", "order": "desc"}
        assert to_query_string(FilterState(q="a b", category_ids=["c1", "c2"], page=2)) == (
            "q=a+b&categories=c1%2Cc2&sort=date&order=desc&page=2"
        )

    def test_serialised_state_parses_back(self):
        state = FilterState(q="x", tag_ids=["t1", "t2"], author_id="a", sort_by="title", page=4)

        assert filter_state_from_params(parse_query_string(to_query_string(state))) == state


class TestFilterSynchronizer:
    def test_hydrates_from_initial_url(self):
        store = FilterStore()
        location = MemoryLocation(query_string="?q=foo&page=2")
        sync = FilterSynchronizer(store, location)

        assert sync.status is SyncStatus.PENDING
        assert sync.on_query_change() is True

        assert sync.status is SyncStatus.SYNCED
        assert store.state.q == "foo"
        assert store.state.page == 2

    def test_hydrates_only_once(self):
        store = FilterStore()
        location = MemoryLocation(query_string="q=foo&page=2")
        sync = FilterSynchronizer(store, location)
        sync.on_query_change()

        location.navigate("q=other&page=9&author=zz")
        assert sync.on_query_change() is False
        assert sync.on_query_change(parse_query_string(location.query_string)) is False

        assert store.state.q == "foo"
        assert store.state.page == 2
        assert store.state.author_id is None

    def test_no_mirroring_before_hydration(self):
        store = FilterStore()
        location = MemoryLocation(query_string="q=foo")
        FilterSynchronizer(store, location)

        store.set_query("bar")

        assert location.replacements == []
        assert location.query_string == "q=foo"

    def test_hydration_normalises_url(self):
        store = FilterStore()
        location = MemoryLocation(query_string="page=1&q=foo")
        sync = FilterSynchronizer(store, location)

        sync.on_query_change()

        assert location.query_string == "q=foo&sort=date&order=desc"
        assert location.replacements == ["q=foo&sort=date&order=desc"]

    def test_state_changes_are_mirrored(self):
        store = FilterStore()
        location = MemoryLocation()
        sync = FilterSynchronizer(store, location)
        sync.on_query_change()

        store.set_category_ids(["c1", "c2"])
        store.set_page(3)

        assert location.url == "/blogs?categories=c1%2Cc2&sort=date&order=desc&page=3"

    def test_unchanged_query_string_is_not_rewritten(self):
        store = FilterStore()
        location = MemoryLocation(query_string="sort=date&order=desc")
        sync = FilterSynchronizer(store, location)

        sync.on_query_change()
        store.set_page(1)
        store.set_query("")

        assert location.replacements == []

    def test_close_stops_mirroring(self):
        store = FilterStore()
        location = MemoryLocation()
        sync = FilterSynchronizer(store, location)
        sync.on_query_change()
        count = len(location.replacements)

        sync.close()
        store.set_query("late")

        assert len(location.replacements) == count
