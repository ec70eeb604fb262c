from snip.database import search
from snip.domain.entities import Snippet


def test_empty_query_returns_none_not_empty_list(repos, make_snippet):
    make_snippet()
    assert repos.snippets.search("") is None


def test_no_match_returns_empty_list(repos, make_snippet):
    make_snippet()
    result = repos.snippets.search("zzz-no-match")
    assert result is not None
    assert result == []


def test_search_on_empty_store(repos):
    assert repos.snippets.search("anything") == []


def test_search_is_case_insensitive(repos, make_snippet):
    s = make_snippet(title="QuickSort")
    assert [x.id for x in repos.snippets.search("quicksort")] == [s.id]
    assert [x.id for x in repos.snippets.search("QUICK")] == [s.id]


def test_search_covers_all_text_fields(repos, make_snippet):
    by_title = make_snippet(title="Binary search", code="a")
    by_language = make_snippet(title="t1", language="Haskell", code="b")
    by_code = make_snippet(title="t2", code="def fibonacci(n): ...")
    by_description = make_snippet(title="t3", code="c", description="Uses memoization")

    assert [s.id for s in repos.snippets.search("binary")] == [by_title.id]
    assert [s.id for s in repos.snippets.search("haskell")] == [by_language.id]
    assert [s.id for s in repos.snippets.search("FIBONACCI")] == [by_code.id]
    assert [s.id for s in repos.snippets.search("memo")] == [by_description.id]


def test_search_results_are_copies(repos, make_snippet):
    make_snippet(title="QuickSort")
    hit = repos.snippets.search("quick")[0]
    hit.set_title("Renamed")
    assert repos.snippets.search("renamed") == []


def test_search_helpers_operate_on_plain_lists():
    a = Snippet(title="Alpha", language="go", code="x", id=1, tags=[1], category_id=2)
    b = Snippet(title="Beta", language="python", code="y", id=2)
    items = [a, b]
    assert search.search(items, "") is None
    assert search.search(items, "ALP") == [a]
    assert search.filter_by_language(items, "python") == [b]
    assert search.filter_by_category(items, 0) == [b]
    assert search.filter_by_tag(items, 1) == [a]
    assert search.matches_query(a, "alpha")
