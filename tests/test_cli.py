import hashlib
import json

import pytest
import responses

from ghprofilestats import cli, config
from ghprofilestats.cache import cache_filename
from ghprofilestats.svg import svg_element_getter
from ghprofilestats.utility import GRAPHQL_URL

OWNER = "U_owner"
USER = "octocat"


def _svg(count=49):
    spans = "".join(f"<tspan>v{i}</tspan>" for i in range(count))
    return f'<svg xmlns="http://www.w3.org/2000/svg"><text>{spans}</text></svg>'


def _handler(request):
    body = json.loads(request.body)
    query = body["query"]
    if "createdAt" in query:
        data = {"user": {"id": OWNER, "createdAt": "2020-01-01T00:00:00Z"}}
    elif "history(first: 100" in query:
        edges = [
            {"node": {"author": {"user": {"id": OWNER}}, "additions": 15, "deletions": 5}},
            {"node": {"author": {"user": {"id": "U_other"}}, "additions": 50, "deletions": 50}},
        ]
        history = {
            "totalCount": 2,
            "edges": edges,
            "pageInfo": {"endCursor": None, "hasNextPage": False},
        }
        data = {"repository": {"defaultBranchRef": {"target": {"history": history}}}}
    elif "repositories(first: 60" in query:
        edge = {
            "node": {
                "nameWithOwner": "octo/proj",
                "defaultBranchRef": {"target": {"history": {"totalCount": 2}}},
            }
        }
        data = {"user": {"repositories": {
            "edges": [edge],
            "pageInfo": {"endCursor": None, "hasNextPage": False},
        }}}
    elif "stargazers" in query:
        data = {"user": {"repositories": {
            "totalCount": 1,
            "edges": [{"node": {"nameWithOwner": "octo/proj",
                                "stargazers": {"totalCount": 4}}}],
            "pageInfo": {"endCursor": None, "hasNextPage": False},
        }}}
    else:
        data = {"user": {"pullRequests": {"totalCount": 8}, "issues": {"totalCount": 6}}}
    return 200, {}, json.dumps({"data": data})


@pytest.fixture
def workspace(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("USER_NAME", USER)
    monkeypatch.setenv("ACCESS_TOKEN", "token")
    monkeypatch.setattr(config, "_owner_id", None)
    (tmp_path / "src").mkdir()
    for name in ("dark_mode.svg", "light_mode.svg"):
        (tmp_path / "src" / name).write_text(_svg(), encoding="utf-8")
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add_callback(responses.POST, GRAPHQL_URL, callback=_handler)
        yield tmp_path


def test_main_fills_both_cards(workspace, capsys):
    assert cli.main([]) == 0
    for name in ("dark_mode.svg", "light_mode.svg"):
        texts = svg_element_getter(workspace / "src" / name)
        assert texts[34] == "1"
        assert texts[36] == "1"
        assert texts[38] == "4"
        assert texts[40] == "1"
        assert texts[42] == "6"
        assert texts[44] == "8"
        assert texts[46] == "10"
        assert texts[47] == "15++"
        assert texts[48] == "5--"
        assert texts[0] == "v0"
    out = capsys.readouterr().out
    assert "LOC (no cache)" in out
    assert "user_getter called" in out


def test_main_writes_cache_and_reuses_it(workspace, monkeypatch, capsys):
    assert cli.main([]) == 0
    lines = cache_filename(USER).read_text(encoding="utf-8").splitlines()
    row = lines[cli.COMMENT_SIZE].split()
    assert row[0] == hashlib.sha256(b"octo/proj").hexdigest()
    assert row[1:] == ["2", "1", "15", "5"]
    capsys.readouterr()

    monkeypatch.setattr(config, "_owner_id", None)
    assert cli.main([]) == 0
    assert "LOC (cached)" in capsys.readouterr().out
    assert cache_filename(USER).read_text(encoding="utf-8").splitlines() == lines


def test_main_without_user_name_fails(workspace, monkeypatch, capsys):
    monkeypatch.delenv("USER_NAME")
    assert cli.main([]) == 1
    assert "USER_NAME not found" in capsys.readouterr().err


def test_main_with_too_small_svg_fails(workspace, capsys):
    (workspace / "src" / "dark_mode.svg").write_text(_svg(10), encoding="utf-8")
    assert cli.main([]) == 1
    assert "Not enough <tspan> elements" in capsys.readouterr().err