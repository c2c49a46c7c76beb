"""End-to-end tests of the command line pipeline on a scratch search path."""

import json

import pytest

from bingraph.cli import main, run_pipeline
from bingraph.config import BingraphConfig


@pytest.fixture
def search_dirs(write_file, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BINGRAPH_OUTPUT_GRAPHVIZ", raising=False)
    monkeypatch.delenv("BINGRAPH_JOBS", raising=False)
    write_file("bin/A", b"#!/usr/bin/env B\n")
    write_file("bin/B", b"#!/bin/sh\n")
    write_file("bin/notes.txt", b"not a binary\n")
    write_file("bin/subdir/C", b"#!/bin/sh\n")
    write_file("lib/libbroken.so", b"\x7fELF" + b"\x00" * 12)
    return tmp_path


def nodes_by_name(payload):
    return {node["name"]: node for node in payload["nodes"]}


class TestMain:
    def test_writes_json_report(self, search_dirs):
        output = search_dirs / "out" / "graph.json"
        code = main(
            [
                "--bin-path", str(search_dirs / "bin"),
                "--lib-path", str(search_dirs / "lib"),
                "--output", str(output),
            ]
        )

        assert code == 0
        payload = json.loads(output.read_text(encoding="utf-8"))
        nodes = nodes_by_name(payload)
        assert set(nodes) == {"A", "B"}
        assert payload["num_nodes"] == 2
        assert payload["num_edges"] == 1
        assert payload["edges"] == [["A", "B"]]
        assert (nodes["A"]["out_degree"], nodes["A"]["in_degree"]) == (1, 0)
        assert (nodes["B"]["out_degree"], nodes["B"]["in_degree"]) == (1, 1)
        assert nodes["A"]["node_type"] == "interp"
        assert not (search_dirs / "graph.dot").exists()

    def test_writes_graphviz_when_requested(self, search_dirs):
        output = search_dirs / "graph.json"
        graphviz = search_dirs / "graph.dot"
        code = main(
            [
                "--bin-path", str(search_dirs / "bin"),
                "--lib-path", "",
                "--output", str(output),
                "--output-graphviz", str(graphviz),
                "--jobs", "2",
            ]
        )

        assert code == 0
        text = graphviz.read_text(encoding="utf-8")
        assert text.startswith("digraph bingraph {")
        assert '  "A" -> "B"' in text
        assert text.count("fillcolor=red") == 2

    def test_unwritable_output_is_fatal(self, search_dirs, write_file):
        blocker = write_file("blocker", b"")
        code = main(
            [
                "--bin-path", str(search_dirs / "bin"),
                "--lib-path", "",
                "--output", str(blocker / "graph.json"),
            ]
        )
        assert code == 1

    def test_invalid_jobs_is_fatal(self, search_dirs):
        assert main(["--bin-path", str(search_dirs / "bin"), "--jobs", "0"]) == 1

    def test_invalid_log_level_from_environment_is_fatal(self, search_dirs, monkeypatch):
        monkeypatch.setenv("BINGRAPH_LOG_LEVEL", "verbose")
        assert main(["--bin-path", str(search_dirs / "bin"), "--lib-path", ""]) == 1


class TestRunPipeline:
    def test_context_reports_skips_and_resolution(self, search_dirs):
        config = BingraphConfig(
            bin_path=str(search_dirs / "bin"), lib_path=str(search_dirs / "lib")
        )
        context = run_pipeline(config)

        ingestion = context["ingestion_output"]
        assert ingestion["scanned_count"] == 4
        assert ingestion["node_count"] == 2
        assert ingestion["failure_count"] == 2
        assert context["resolver_output"] == {
            "declared_count": 2,
            "resolved_count": 1,
            "unresolved_count": 1,
        }
        assert context["report_warnings"] == []
        assert set(context["centrality_output"]) == {
            "betweenness",
            "katz",
            "eigenvector",
            "closeness",
        }

    def test_repeated_runs_are_identical(self, search_dirs):
        config = BingraphConfig(bin_path=str(search_dirs / "bin"), lib_path="")
        first = run_pipeline(config)["report"]
        second = run_pipeline(config)["report"]

        assert first["nodes"] == second["nodes"]
        assert first["edges"] == second["edges"]
