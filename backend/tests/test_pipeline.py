from __future__ import annotations

import re

from recipe_catalog.services.filters import compile_filters
from recipe_catalog.services.nutrients import LEADING_NUMBER_PATTERN, leading_number
from recipe_catalog.services.pipeline import (
    CALORIES_EXPR,
    count_pipeline,
    page_pipeline,
    project,
    run_page,
    sort_key,
)


def _ops(pipeline):
    return [next(iter(stage)) for stage in pipeline]


def test_count_pipeline_stops_after_filter():
    preds = compile_filters({"rating": ">=4"})
    assert _ops(count_pipeline(preds)) == ["$addFields", "$match", "$count"]


def test_page_pipeline_stage_order():
    preds = compile_filters({"calories": "<=400"})
    pipeline = page_pipeline(preds, skip=20, limit=10)
    assert _ops(pipeline) == ["$addFields", "$match", "$sort", "$skip", "$limit", "$project"]
    assert pipeline[1] == {"$match": {"caloriesNumeric": {"$lte": 400.0}}}
    assert pipeline[3] == {"$skip": 20}
    assert pipeline[4] == {"$limit": 10}


def test_no_predicates_skips_match():
    assert "$match" not in _ops(page_pipeline([], 0, 10))
    assert "$match" not in _ops(count_pipeline([]))


def test_sort_and_projection_stages():
    pipeline = page_pipeline([], 0, 10)
    assert list(pipeline[1]["$sort"].items()) == [("rating", -1), ("caloriesNumeric", -1), ("_id", 1)]
    proj = pipeline[-1]["$project"]
    assert "caloriesNumeric" not in proj
    assert "imported_at" not in proj
    assert proj["nutrients"] == 1


def test_missing_rating_sorts_last():
    docs = [{"rating": None, "caloriesNumeric": 999.0}, {"rating": 1.0, "caloriesNumeric": 0.0}]
    ordered = sorted(docs, key=sort_key)
    assert ordered[0]["rating"] == 1.0


def test_run_page_is_stable_for_ties():
    docs = [{"_id": i, "title": f"t{i}", "rating": 4.0, "nutrients": {"calories": "100 kcal"}} for i in range(5)]
    assert [d["_id"] for d in run_page(docs, [], 0, 5)] == [0, 1, 2, 3, 4]
    assert [d["_id"] for d in run_page(docs, [], 2, 2)] == [2, 3]


def test_project_drops_internal_fields():
    out = project({"_id": 1, "title": "x", "caloriesNumeric": 5.0, "imported_at": "now", "__v": 0})
    assert out == {"_id": 1, "title": "x"}


def _regex_in(expr):
    return expr["$let"]["vars"]["m"]["$regexFind"]["regex"]


def test_mongo_calories_uses_the_shared_token_pattern():
    pattern = _regex_in(CALORIES_EXPR)
    assert pattern == LEADING_NUMBER_PATTERN
    assert CALORIES_EXPR["$let"]["vars"]["m"]["$regexFind"]["input"]["$convert"]["input"] == "$nutrients.calories"

    cases = {
        "389 kcal": 389.0,
        "kcal": 0.0,
        "": 0.0,
        "389\tkcal": 389.0,
        "389\u00a0kcal": 389.0,
        "1_000 kcal": 0.0,
    }
    for text, expected in cases.items():
        m = re.match(pattern, text)
        got = float(m.group(1)) if m else 0.0
        assert got == expected == leading_number(text), text
