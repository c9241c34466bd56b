"""Tests for the PostgREST record store client (httpx.MockTransport)."""

import json

import httpx
import pytest

from store.remote import PostgrestRecordStore, RecordStoreError, remote_configured

URL = "https://proj.supabase.co"


def _store(handler, token="tok"):
    client = httpx.Client(base_url=URL, transport=httpx.MockTransport(handler))
    return PostgrestRecordStore(URL, "anon", access_token=token, client=client)


class TestRemoteConfigured:
    def test_requires_both(self):
        assert remote_configured(URL, "key")
        assert not remote_configured(URL, None)
        assert not remote_configured(None, "key")

    def test_placeholder_url_is_not_configured(self):
        assert not remote_configured("https://placeholder.supabase.co", "key")


class TestSession:
    def test_no_token_means_signed_out(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert _store(handler, token=None).get_session() is None

    def test_valid_token(self):
        def handler(request):
            assert request.url.path == "/auth/v1/user"
            assert request.headers["Authorization"] == "Bearer tok"
            assert request.headers["apikey"] == "anon"
            return httpx.Response(200, json={"id": "u1", "email": "a@b.co"})

        session = _store(handler).get_session()
        assert session.user_id == "u1"
        assert session.email == "a@b.co"

    def test_rejected_token(self):
        store = _store(lambda r: httpx.Response(401, json={"msg": "expired"}))
        assert store.get_session() is None

    def test_server_error_raises(self):
        store = _store(lambda r: httpx.Response(500))
        with pytest.raises(RecordStoreError):
            store.get_session()

    def test_sign_in_stores_token(self):
        def handler(request):
            assert request.url.params["grant_type"] == "password"
            assert json.loads(request.content) == {"email": "a@b.co", "password": "pw"}
            return httpx.Response(
                200,
                json={"access_token": "new", "refresh_token": "r", "user": {"id": "u1", "email": "a@b.co"}},
            )

        store = _store(handler, token=None)
        session = store.sign_in("a@b.co", "pw")
        assert session.access_token == "new"
        assert store.access_token == "new"

    def test_sign_in_bad_credentials(self):
        store = _store(lambda r: httpx.Response(400, json={"error": "invalid_grant"}), token=None)
        with pytest.raises(RecordStoreError, match="400"):
            store.sign_in("a@b.co", "wrong")


class TestRows:
    def test_select_filters_and_orders(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[{"id": "m1"}])

        rows = _store(handler).select("memories", "u1", order_by="created_at", limit=5)
        assert rows == [{"id": "m1"}]
        assert seen["path"] == "/rest/v1/memories"
        assert seen["params"] == {
            "select": "*",
            "user_id": "eq.u1",
            "order": "created_at.desc",
            "limit": "5",
        }

    def test_select_one_empty(self):
        assert _store(lambda r: httpx.Response(200, json=[])).select_one("profiles", "u1") is None

    def test_select_non_list_raises(self):
        store = _store(lambda r: httpx.Response(200, json={"oops": True}))
        with pytest.raises(RecordStoreError):
            store.select("memories", "u1")

    def test_insert(self):
        def handler(request):
            assert request.method == "POST"
            assert request.headers["Prefer"] == "return=minimal"
            assert json.loads(request.content) == {"id": "m1"}
            return httpx.Response(201)

        _store(handler).insert("memories", {"id": "m1"})

    def test_update_by_id(self):
        def handler(request):
            assert request.method == "PATCH"
            assert request.url.params["id"] == "eq.m1"
            return httpx.Response(204)

        _store(handler).update("memories", "m1", {"title": "t"})

    def test_upsert(self):
        def handler(request):
            assert request.url.params["on_conflict"] == "user_id"
            assert "merge-duplicates" in request.headers["Prefer"]
            return httpx.Response(201)

        _store(handler).upsert("profiles", [{"user_id": "u1"}], on_conflict="user_id")

    def test_upsert_empty_sends_nothing(self):
        def handler(request):
            raise AssertionError("no request expected")

        _store(handler).upsert("drafts", [])

    def test_delete_missing(self):
        def handler(request):
            assert request.method == "DELETE"
            assert request.url.params["user_id"] == "eq.u1"
            assert request.url.params["id"] == 'not.in.("d1","d2")'
            return httpx.Response(204)

        _store(handler).delete_missing("drafts", "u1", ["d1", "d2"])

    def test_delete_missing_with_no_keepers_deletes_all(self):
        def handler(request):
            assert "id" not in request.url.params
            return httpx.Response(204)

        _store(handler).delete_missing("drafts", "u1", [])

    def test_http_error_wrapped(self):
        store = _store(lambda r: httpx.Response(409, text="duplicate key"))
        with pytest.raises(RecordStoreError, match="409"):
            store.insert("memories", {"id": "m1"})

    def test_network_error_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(RecordStoreError, match="request failed"):
            _store(handler).delete("memories", "m1")
