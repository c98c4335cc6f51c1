import json

from clubhouse.api import envelope


def _body(response):
    return json.loads(response.body)


def test_ok_with_data_and_message():
    response = envelope.ok({"id": 1}, "Created", 201)
    assert response.status_code == 201
    assert _body(response) == {"success": True, "data": {"id": 1}, "message": "Created"}


def test_ok_omits_absent_members():
    assert _body(envelope.ok(message="Deleted")) == {"success": True, "message": "Deleted"}
    assert _body(envelope.ok([])) == {"success": True, "data": []}


def test_nested_nulls_are_kept():
    assert _body(envelope.ok({"end_date": None})) == {"success": True, "data": {"end_date": None}}


def test_paginated():
    body = _body(envelope.paginated([1, 2], page=2, limit=2, total=5))
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "totalPages": 3}
    assert body["data"] == [1, 2]


def test_failure():
    response = envelope.failure("Story not found", 404)
    assert response.status_code == 404
    assert _body(response) == {"success": False, "error": "Story not found"}
