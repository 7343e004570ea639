"""Tests for the cache-explain command line."""
import io
import json

import pytest

from cache_explain.cli import main


@pytest.fixture
def exchange_file(tmp_path):
    def _write(data, name="exchange.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)

    return _write


class TestCli:
    def test_json_output(self, exchange_file, capsys):
        path = exchange_file({"method": "GET", "statusCode": 500})
        assert main([path, "--json"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["summary"] == "Not cacheable"
        assert output["type"] is None
        assert output["source"] == path

    def test_json_output_for_several_files(self, exchange_file, capsys):
        first = exchange_file({"method": "GET", "statusCode": 301}, "a.json")
        second = exchange_file({"method": "DELETE", "statusCode": 200}, "b.json")
        assert main([first, second, "--json"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert [item["summary"] for item in output] == ["Cacheable", "Not cacheable"]

    def test_panel_output(self, exchange_file, capsys):
        path = exchange_file({
            "method": "GET",
            "statusCode": 200,
            "responseHeaders": {"cache-control": "max-age=60"},
        })
        assert main([path]) == 0
        output = capsys.readouterr().out
        assert "Cacheable" in output
        assert "warning" in output

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("method: GET\nstatusCode: 200\n"))
        assert main(["--json"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["summary"] == "Typically not cacheable"
        assert output["type"] == "warning"

    def test_bad_input_exits_2(self, exchange_file):
        path = exchange_file({"statusCode": 200})
        assert main([path]) == 2
