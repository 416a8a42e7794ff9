import pytest
from httpx import ASGITransport, AsyncClient
from blockcode.main import app


def client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def open_session(http: AsyncClient, **payload) -> dict:
    response = await http.post("/api/v1/sessions", json=payload)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_health():
    async with client() as http:
        response = await http.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["languages"] == ["python", "javascript"]


@pytest.mark.asyncio
async def test_list_languages():
    async with client() as http:
        response = await http.get("/api/v1/languages")

    languages = {item["id"]: item for item in response.json()}
    assert languages["python"]["display_name"] == "Python"
    assert languages["python"]["default_keywords"] == ["for", "if", "def", "print"]


@pytest.mark.asyncio
async def test_suggest_after_function_header():
    async with client() as http:
        response = await http.post("/api/v1/suggest", json={
            "input_prefix": "",
            "language": "python",
            "source_text": "def f():\n",
            "cursor_line": 1
        })

    assert response.status_code == 200
    body = response.json()
    assert body["context"] == "block_entry"
    assert [s["block"] for s in body["suggestions"]][:4] == ["return", "pass", "for", "if"]
    assert body["suggestions"][0]["kind"] == "keyword"


@pytest.mark.asyncio
async def test_suggest_clamps_cursor_line():
    async with client() as http:
        response = await http.post("/api/v1/suggest", json={
            "input_prefix": "x",
            "language": "python",
            "source_text": "def f():\n",
            "cursor_line": 99
        })

    assert response.json()["context"] == "block_entry"


@pytest.mark.asyncio
async def test_suggest_unknown_language_is_empty():
    async with client() as http:
        response = await http.post("/api/v1/suggest", json={
            "input_prefix": "f",
            "language": "haskell",
            "source_text": "main = pure ()",
            "cursor_line": 0
        })

    assert response.status_code == 200
    assert response.json()["suggestions"] == []


@pytest.mark.asyncio
async def test_symbols_and_context_endpoints():
    async with client() as http:
        symbols = await http.post("/api/v1/symbols", json={
            "source_text": "_private = 1\npublic = 2",
            "language": "python"
        })
        context = await http.post("/api/v1/context", json={
            "source_text": "\n\n",
            "cursor_line": 1
        })

    assert symbols.json()["symbols"] == ["public"]
    assert context.json() == {"context": "blank_program_start", "cursor_line": 1}


@pytest.mark.asyncio
async def test_session_suggest_apply_and_undo():
    """Type below a header, pick a suggestion, then undo it"""
    code = "def area(radius):\n    ra"

    async with client() as http:
        session = await open_session(http, file_name="shapes.py")
        sid = session["session_id"]
        assert session["language"] == "python"

        await http.put(f"/api/v1/sessions/{sid}/code", json={"code": code})

        suggestions = await http.post(
            f"/api/v1/sessions/{sid}/suggest", json={"cursor_offset": len(code)}
        )
        body = suggestions.json()
        assert body["input_prefix"] == "ra"
        assert [s["block"] for s in body["suggestions"]] == [
            "return", "pass", "for", "if", "range", "radius"
        ]

        applied = await http.post(f"/api/v1/sessions/{sid}/apply", json={
            "cursor_offset": len(code),
            "block": "range",
            "completion": "(10)"
        })
        view = applied.json()
        assert view["code"] == "def area(radius):\n    range(10)"
        assert view["cursor_offset"] == len(view["code"])

        undone = await http.post(f"/api/v1/sessions/{sid}/undo")
        assert undone.json()["moved"] is True
        assert undone.json()["session"]["code"] == code

        redone = await http.post(f"/api/v1/sessions/{sid}/redo")
        assert redone.json()["session"]["code"] == "def area(radius):\n    range(10)"


@pytest.mark.asyncio
async def test_session_apply_replaces_token_at_cursor():
    """Suggest and apply agree on the token when the cursor is mid-line"""
    code = "total = pri + y"

    async with client() as http:
        session = await open_session(http, file_name="calc.py")
        sid = session["session_id"]
        await http.put(f"/api/v1/sessions/{sid}/code", json={"code": code})

        suggestions = await http.post(
            f"/api/v1/sessions/{sid}/suggest", json={"cursor_offset": 11}
        )
        assert suggestions.json()["input_prefix"] == "pri"

        applied = await http.post(f"/api/v1/sessions/{sid}/apply", json={
            "cursor_offset": 11,
            "block": "print",
            "completion": '("")'
        })

    view = applied.json()
    assert view["code"] == 'total = print("") + y'
    assert view["cursor_offset"] == len('total = print("")')


@pytest.mark.asyncio
async def test_session_newline_and_indent():
    async with client() as http:
        session = await open_session(http, file_name="main.py")
        sid = session["session_id"]
        await http.put(f"/api/v1/sessions/{sid}/code", json={"code": "if ready:"})

        newline = await http.post(f"/api/v1/sessions/{sid}/newline", json={"cursor_offset": 9})
        assert newline.json()["code"] == "if ready:\n    "
        assert newline.json()["cursor_offset"] == 14

        dedent = await http.post(f"/api/v1/sessions/{sid}/indent", json={
            "selection_start": 10,
            "selection_end": 14,
            "increase": False
        })
        assert dedent.json()["code"] == "if ready:\n"


@pytest.mark.asyncio
async def test_session_edit_mode_and_save():
    async with client() as http:
        session = await open_session(http, file_name="fib.py", mode="edit")
        sid = session["session_id"]
        saved = await http.post(f"/api/v1/sessions/{sid}/save")
        deleted = await http.delete(f"/api/v1/sessions/{sid}")
        missing = await http.get(f"/api/v1/sessions/{sid}")

    assert session["code"].startswith("# fib.py")
    assert session["can_undo"] is False
    assert saved.json()["saved_at"] is not None
    assert deleted.status_code == 204
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_unknown_session_returns_404():
    async with client() as http:
        response = await http.post("/api/v1/sessions/nope/undo")

    assert response.status_code == 404
    assert response.json()["error"] == "Session not found"


@pytest.mark.asyncio
async def test_unknown_session_mode_returns_400():
    async with client() as http:
        response = await http.post("/api/v1/sessions", json={"mode": "open"})

    assert response.status_code == 400
    assert response.json()["error"] == "Bad request"


@pytest.mark.asyncio
async def test_negative_cursor_offset_is_rejected():
    async with client() as http:
        session = await open_session(http)
        response = await http.post(
            f"/api/v1/sessions/{session['session_id']}/suggest",
            json={"cursor_offset": -1}
        )

    assert response.status_code == 422


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
