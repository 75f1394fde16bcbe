import logging

import pytest

import discordr
from discordr import api, capture
from discordr.connections import create_connection, set_default_connection
from discordr.errors import FileNotFound, NotConfigured

from conftest import Recorder


@pytest.fixture
def default_conn():
    conn = create_connection("https://hook.test/default", "dataman")
    set_default_connection(conn)
    return conn


def test_send_message_uses_default_connection(recorder: Recorder, default_conn) -> None:
    with recorder.client() as client:
        res = api.send_message("Hello World!", client=client)
    assert res is not None and res.status_code == 204
    assert str(recorder.requests[0].url) == default_conn.webhook_url
    assert recorder.json_bodies() == [{"content": "Hello World!", "username": "dataman"}]


def test_send_message_explicit_connection_wins(recorder: Recorder, default_conn) -> None:
    other = create_connection("https://hook.test/other", "other")
    with recorder.client() as client:
        api.send_message("hi", conn=other, client=client)
    assert str(recorder.requests[0].url) == "https://hook.test/other"


def test_send_message_empty(recorder: Recorder, caplog) -> None:
    caplog.set_level(logging.INFO, logger="discordr.api")
    assert api.send_message("") is None
    assert "Empty message provided." in caplog.text
    assert recorder.requests == []


def test_send_message_not_configured() -> None:
    with pytest.raises(NotConfigured):
        api.send_message("hi")


def test_send_message_legacy_environment(recorder: Recorder, monkeypatch) -> None:
    monkeypatch.setenv("DISCORDR_WEBHOOK", "https://hook.test/env")
    monkeypatch.setenv("DISCORDR_USERNAME", "Travis CI")
    with recorder.client() as client:
        api.send_message("testing...", client=client)
    assert str(recorder.requests[0].url) == "https://hook.test/env"
    assert recorder.json_bodies()[0]["username"] == "Travis CI"


def test_send_file_missing(default_conn, tmp_path) -> None:
    with pytest.raises(FileNotFound, match="File not found"):
        api.send_file(tmp_path / "nope.jpg")


def test_send_file(recorder: Recorder, default_conn, tmp_path) -> None:
    path = tmp_path / "image.jpg"
    path.write_bytes(b"jpeg")
    with recorder.client() as client:
        res = api.send_file(path, client=client)
    assert res.status_code == 200
    assert path.exists()


def test_send_values_removes_temp_file(recorder: Recorder, default_conn, tmp_path, monkeypatch) -> None:
    target = tmp_path / "values.pkl"
    monkeypatch.setattr(capture, "temp_path", lambda suffix: target)
    with recorder.client() as client:
        res = api.send_values({"x": 1}, client=client)
    assert res is not None and res.ok
    assert b'filename="values.pkl"' in recorder.requests[0].content
    assert not target.exists()


def test_send_values_keeps_named_file(recorder: Recorder, default_conn, tmp_path) -> None:
    target = tmp_path / "test_data.pkl"
    with recorder.client() as client:
        api.send_values({"x": 1}, filename=target, client=client)
    assert target.exists()


def test_send_values_cleans_up_when_not_configured(tmp_path, monkeypatch) -> None:
    target = tmp_path / "values.pkl"
    monkeypatch.setattr(capture, "temp_path", lambda suffix: target)
    with pytest.raises(NotConfigured):
        api.send_values({"x": 1})
    assert not target.exists()


def test_send_values_empty(recorder: Recorder, default_conn) -> None:
    assert api.send_values({}) is None


def test_send_formula_empty(default_conn) -> None:
    assert api.send_formula("") is None


def test_send_structured_plot(recorder: Recorder, default_conn, tmp_path, monkeypatch) -> None:
    target = tmp_path / "gg.png"
    monkeypatch.setattr(capture, "temp_path", lambda suffix: target)

    class Plot:
        def save(self, path: str) -> None:
            with open(path, "wb") as f:
                f.write(b"png")

    with recorder.client() as client:
        res = api.send_structured_plot(Plot(), client=client)
    assert res.status_code == 200
    assert not target.exists()


def test_send_console_single_message(recorder: Recorder, default_conn) -> None:
    with recorder.client() as client:
        results = api.send_console(lambda: 2 + 2, client=client)
    assert results is not None and len(results) == 1
    assert recorder.json_bodies()[0]["content"] == "```\n4\n```"


def test_send_console_long_output_is_chunked(recorder: Recorder, default_conn) -> None:
    def noisy() -> None:
        for i in range(10):
            print(f"row {i}")

    with recorder.client(chunk_len=12) as client:
        results = api.send_console(noisy, client=client)

    assert results is not None
    assert len(results) == 5
    contents = [b["content"] for b in recorder.json_bodies()]
    assert contents[0] == "```\nrow 0\nrow 1\n```"
    assert recorder.sleeps == [1.0] * 4


def test_send_console_no_calls_or_output(recorder: Recorder, default_conn, caplog) -> None:
    caplog.set_level(logging.INFO, logger="discordr.api")
    assert api.send_console() is None
    assert "No calls provided." in caplog.text
    assert api.send_console(lambda: None) is None
    assert "No console output" in caplog.text


def test_package_exports() -> None:
    assert discordr.send_message is api.send_message
    assert discordr.chunk_text("a", 5) == ["a"]


def test_send_current_plot_uploads_and_removes_temp_file(
    recorder: Recorder, default_conn, tmp_path, monkeypatch
) -> None:
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    target = tmp_path / "plot.png"
    monkeypatch.setattr(capture, "temp_path", lambda suffix: target)
    plt.close("all")
    plt.figure(figsize=(2, 1), dpi=50)
    plt.plot([1, 2, 3])
    try:
        with recorder.client() as client:
            res = api.send_current_plot(client=client)
    finally:
        plt.close("all")

    assert res.status_code == 200
    body = recorder.requests[0].content
    assert b'name="content"; filename="plot.png"' in body
    assert b"\x89PNG" in body
    assert b"dataman" in body
    assert not target.exists()


def test_send_formula_uploads_and_removes_temp_file(
    recorder: Recorder, default_conn, tmp_path, monkeypatch
) -> None:
    pytest.importorskip("matplotlib")
    target = tmp_path / "formula.png"
    monkeypatch.setattr(capture, "temp_path", lambda suffix: target)
    with recorder.client() as client:
        res = api.send_formula(r"e^{i\pi} + 1 = 0", client=client)

    assert res is not None and res.status_code == 200
    body = recorder.requests[0].content
    assert b'filename="formula.png"' in body
    assert b"\x89PNG" in body
    assert not target.exists()
