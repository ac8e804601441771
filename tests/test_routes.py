# tests/test_routes.py

from __future__ import annotations

from fastapi.testclient import TestClient

from tasklist.core.state import AppState
from tasklist.tasks.task_api import TITLE_REQUIRED_MESSAGE

HTMX = {"HX-Request": "true"}


def _seed(state: AppState, *titles: str) -> None:
    for t in titles:
        state.task_store.add(t)


# ---- list ----


def test_root_redirects_to_tasks(client: TestClient) -> None:
    r = client.get("/")
    assert r.status_code == 303
    assert r.headers["location"] == "/tasks"


def test_list_full_page(client: TestClient, state: AppState) -> None:
    _seed(state, "Buy milk", "Walk dog")

    r = client.get("/tasks")

    assert r.status_code == 200
    assert r.text.lstrip().lower().startswith("<!doctype html>")
    assert 'id="task-1"' in r.text and 'id="task-2"' in r.text
    assert "Showing 2 tasks." in r.text
    assert "HX-Request" in r.headers["vary"]


def test_list_fragment_on_htmx_request(client: TestClient, state: AppState) -> None:
    _seed(state, "Buy milk", "Walk dog")

    r = client.get("/tasks", headers=HTMX)

    assert r.status_code == 200
    assert "<!doctype" not in r.text.lower()
    assert '<ul id="task-list">' in r.text
    assert 'id="pager"' in r.text
    assert 'hx-swap-oob="true"' in r.text
    assert "Showing 2 tasks." in r.text


def test_fragment_endpoint_filters(client: TestClient, state: AppState) -> None:
    _seed(state, "Buy milk", "Walk dog")

    r = client.get("/tasks/fragment", params={"q": "DOG"})

    assert r.status_code == 200
    assert "Walk dog" in r.text
    assert "Buy milk" not in r.text
    assert "Found 1 task matching" in r.text


def test_fragment_endpoint_clamps_page(client: TestClient, state: AppState) -> None:
    _seed(state, *[f"task {i}" for i in range(12)])

    r = client.get("/tasks/fragment", params={"page": "99"})

    assert "Page 2 of 2" in r.text
    assert "task 11" in r.text
    assert "task 0<" not in r.text


def test_list_ignores_unparseable_page(client: TestClient, state: AppState) -> None:
    _seed(state, "only")

    r = client.get("/tasks", params={"page": "abc"})

    assert r.status_code == 200
    assert "Page 1 of 1" in r.text


def test_empty_list_shows_placeholder(client: TestClient) -> None:
    r = client.get("/tasks/fragment")
    assert 'id="task-empty"' in r.text


# ---- add ----


def test_add_htmx_returns_created_fragment(client: TestClient, state: AppState) -> None:
    r = client.post("/tasks", data={"title": "  Buy milk "}, headers=HTMX)

    assert r.status_code == 201
    assert 'id="task-1"' in r.text
    assert "Buy milk" in r.text
    assert "added successfully." in r.text
    assert 'hx-swap-oob="delete"' in r.text
    assert state.task_store.find(1).title == "Buy milk"


def test_add_full_page_redirects(client: TestClient, state: AppState) -> None:
    r = client.post("/tasks", data={"title": "Walk dog"})

    assert r.status_code == 303
    assert r.headers["location"] == "/tasks"
    assert state.task_store.count() == 1


def test_add_blank_htmx_returns_400(client: TestClient, state: AppState) -> None:
    r = client.post("/tasks", data={"title": "   "}, headers=HTMX)

    assert r.status_code == 400
    assert 'role="alert"' in r.text
    assert TITLE_REQUIRED_MESSAGE in r.text
    assert state.task_store.count() == 0


def test_add_blank_full_page_redirects_with_error_flag(client: TestClient, state: AppState) -> None:
    r = client.post("/tasks", data={"title": ""})

    assert r.status_code == 303
    assert r.headers["location"] == "/tasks?error=required"
    assert state.task_store.count() == 0

    page = client.get(r.headers["location"])
    assert TITLE_REQUIRED_MESSAGE in page.text
    assert 'role="alert"' in page.text


def test_add_missing_field_is_treated_as_blank(client: TestClient, state: AppState) -> None:
    r = client.post("/tasks", headers=HTMX)

    assert r.status_code == 400
    assert state.task_store.count() == 0


def test_titles_are_html_escaped(client: TestClient) -> None:
    r = client.post("/tasks", data={"title": "<script>alert(1)</script>"}, headers=HTMX)

    assert r.status_code == 201
    assert "<script>" not in r.text
    assert "&lt;script&gt;" in r.text


# ---- delete ----


def test_delete_htmx(client: TestClient, state: AppState) -> None:
    _seed(state, "doomed")

    r = client.post("/tasks/1/delete", headers=HTMX)

    assert r.status_code == 200
    assert "Task deleted." in r.text
    assert "<li" not in r.text
    assert state.task_store.count() == 0


def test_delete_unknown_htmx(client: TestClient, state: AppState) -> None:
    _seed(state, "survivor")

    for path in ("/tasks/99/delete", "/tasks/abc/delete"):
        r = client.post(path, headers=HTMX)
        assert r.status_code == 200
        assert "Could not delete task." in r.text

    assert state.task_store.count() == 1


def test_delete_full_page_always_redirects(client: TestClient, state: AppState) -> None:
    _seed(state, "doomed")

    assert client.post("/tasks/1/delete").headers["location"] == "/tasks"
    r = client.post("/tasks/1/delete")
    assert r.status_code == 303
    assert r.headers["location"] == "/tasks"


# ---- edit ----


def test_edit_form_htmx(client: TestClient, state: AppState) -> None:
    _seed(state, "Buy milk")

    r = client.get("/tasks/1/edit", headers=HTMX)

    assert r.status_code == 200
    assert 'class="editing"' in r.text
    assert 'value="Buy milk"' in r.text
    assert "<!doctype" not in r.text.lower()


def test_edit_form_full_page_marks_task_as_editing(client: TestClient, state: AppState) -> None:
    _seed(state, *[f"task {i}" for i in range(15)])

    r = client.get("/tasks/13/edit")

    assert r.status_code == 200
    assert r.text.lstrip().lower().startswith("<!doctype html>")
    assert 'class="editing"' in r.text
    assert 'value="task 12"' in r.text
    assert "Page 2 of 2" in r.text


def test_edit_form_full_page_shows_error_flag(client: TestClient, state: AppState) -> None:
    _seed(state, "Buy milk")

    r = client.get("/tasks/1/edit", params={"error": "required"})

    assert TITLE_REQUIRED_MESSAGE in r.text
    assert 'aria-invalid="true"' in r.text


def test_edit_form_unknown_task(client: TestClient) -> None:
    r = client.get("/tasks/7/edit", headers=HTMX)
    assert r.status_code == 404
    assert "Task not found." in r.text

    r = client.get("/tasks/nope/edit")
    assert r.status_code == 404
    assert "Task not found." in r.text
    assert "<!doctype html>" in r.text.lower()


def test_edit_submit_htmx(client: TestClient, state: AppState) -> None:
    _seed(state, "draft")

    r = client.post("/tasks/1/edit", data={"title": " final "}, headers=HTMX)

    assert r.status_code == 200
    assert 'id="task-1"' in r.text
    assert "final" in r.text
    assert "updated." in r.text
    assert 'class="editing"' not in r.text
    assert state.task_store.find(1).title == "final"


def test_edit_submit_full_page_redirects(client: TestClient, state: AppState) -> None:
    _seed(state, "draft")

    r = client.post("/tasks/1/edit", data={"title": "final"})

    assert r.status_code == 303
    assert r.headers["location"] == "/tasks"
    assert state.task_store.find(1).title == "final"


def test_edit_submit_blank_htmx(client: TestClient, state: AppState) -> None:
    _seed(state, "keep")

    r = client.post("/tasks/1/edit", data={"title": "  "}, headers=HTMX)

    assert r.status_code == 400
    assert 'class="editing"' in r.text
    assert TITLE_REQUIRED_MESSAGE in r.text
    assert 'role="alert"' in r.text
    assert state.task_store.find(1).title == "keep"


def test_edit_submit_blank_full_page(client: TestClient, state: AppState) -> None:
    _seed(state, "keep")

    r = client.post("/tasks/1/edit", data={"title": ""})

    assert r.status_code == 303
    assert r.headers["location"] == "/tasks/1/edit?error=required"
    assert state.task_store.find(1).title == "keep"


def test_edit_submit_unknown_task(client: TestClient, state: AppState) -> None:
    r = client.post("/tasks/5/edit", data={"title": "x"}, headers=HTMX)

    assert r.status_code == 404
    assert state.task_store.count() == 0


# ---- view ----


def test_view_htmx(client: TestClient, state: AppState) -> None:
    _seed(state, "Buy milk")

    r = client.get("/tasks/1/view", headers=HTMX)

    assert r.status_code == 200
    assert 'id="task-1"' in r.text
    assert "Buy milk" in r.text
    assert 'class="editing"' not in r.text


def test_view_full_page_redirects(client: TestClient, state: AppState) -> None:
    _seed(state, "Buy milk")

    r = client.get("/tasks/1/view")

    assert r.status_code == 303
    assert r.headers["location"] == "/tasks"


def test_view_unknown_task(client: TestClient) -> None:
    assert client.get("/tasks/3/view", headers=HTMX).status_code == 404


# ---- misc ----


def test_health(client: TestClient, state: AppState) -> None:
    _seed(state, "a", "b")

    r = client.get("/health")

    assert r.status_code == 200
    assert r.json() == {"status": "ok", "tasks": 2}


def test_fragment_search_matches_query_with_spaces(client: TestClient, state: AppState) -> None:
    _seed(state, "hotdog", "Walk dog")

    r = client.get("/tasks/fragment", params={"q": " dog"})

    assert "Walk dog" in r.text
    assert "hotdog" not in r.text
    assert "Found 1 task matching" in r.text


def test_whitespace_query_lists_everything(client: TestClient, state: AppState) -> None:
    _seed(state, "hotdog", "Walk dog")

    r = client.get("/tasks", params={"q": "   "}, headers=HTMX)

    assert "Showing 2 tasks." in r.text
