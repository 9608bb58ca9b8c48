import pytest

from igfs_chat import main


def test_run_exits_without_api_key(monkeypatch):
  monkeypatch.delenv("GEMINI_API_KEY", raising=False)
  started = []
  monkeypatch.setattr("uvicorn.run", lambda *a, **k: started.append(a))

  with pytest.raises(SystemExit) as excinfo:
    main.run()
  assert excinfo.value.code == 1
  assert started == []


def test_run_starts_server_with_settings(monkeypatch):
  monkeypatch.setenv("GEMINI_API_KEY", "abcdef123456")
  monkeypatch.setenv("PORT", "9001")
  started = {}

  def fake_run(app, **kwargs):
    started["app"] = app
    started.update(kwargs)

  monkeypatch.setattr("uvicorn.run", fake_run)
  main.run()

  assert started["port"] == 9001
  assert started["app"].title == "IGFS AI Chat API"
