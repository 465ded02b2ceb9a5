import json

import pytest

from comment_checks import MESSAGE, Finding, MethodBodyCommentsCheck, RuleConfig, SingleLineCommentCheck
from comment_checks.analysis import Analyzer, DocumentError, build_analyzer, load_documents, main, parse_document
from comment_checks.single_line import MalformedEventError

FOO = {
    "path": "Foo.java",
    "lines": [
        "class Foo {",             # 1
        "    void run() {",        # 2
        "        a();",            # 3
        "        // TODO cleanup", # 4
        "    }",                   # 5
        "    /* fixme */",         # 6
        "    int x;",              # 7
        "}",                       # 8
    ],
    "comments": [
        {"kind": "begin", "text": "/*", "line": 6},
        {"kind": "content", "text": " fixme "},
        {"kind": "end", "text": "*/", "line": 6},
    ],
    "methods": [{"open": 2, "close": 5}],
}


def dump(tmp_path, data, name="foo.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return path


def test_analyzer_runs_both_checks():
    doc = parse_document(FOO)
    findings = build_analyzer(RuleConfig.compile(r"^/\*.*\*/$", "one-liner")).run(doc)
    assert findings == [Finding(6, "one-liner"), Finding(4, MESSAGE)]


def test_analyzer_uses_fresh_comment_state_per_file():
    broken = dict(FOO, comments=[{"kind": "begin", "text": "/*", "line": 1}])
    analyzer = build_analyzer(RuleConfig.compile(r"(?s).*", "m"))
    with pytest.raises(MalformedEventError):
        analyzer.run(parse_document(broken))
    assert analyzer.run(parse_document(FOO))[0] == Finding(6, "m")


@pytest.mark.parametrize("raw", [
    [],
    {"lines": []},
    dict(FOO, comments=[{"kind": "middle", "text": ""}]),
    dict(FOO, comments=[{"kind": "end", "text": "*/"}]),
    dict(FOO, methods=[{"open": 5, "close": 2}]),
])
def test_bad_documents(raw):
    with pytest.raises(DocumentError):
        parse_document(raw)


def test_registered_checks_only():
    doc = parse_document(FOO)
    config = RuleConfig.compile(r"^/\*.*\*/$", "one-liner")
    comments_only = Analyzer()
    comments_only.register(lambda: SingleLineCommentCheck(config))
    assert comments_only.run(doc) == [Finding(6, "one-liner")]
    bodies_only = Analyzer()
    bodies_only.register(MethodBodyCommentsCheck)
    assert bodies_only.run(doc) == [Finding(4, MESSAGE)]
    assert Analyzer().run(doc) == []


def test_registered_factory_is_called_per_file():
    made = []

    def make():
        check = SingleLineCommentCheck(RuleConfig())
        made.append(check)
        return check

    analyzer = Analyzer()
    analyzer.register(make)
    doc = parse_document(FOO)
    analyzer.run(doc)
    analyzer.run(doc)
    assert len(made) == 2 and made[0] is not made[1]


def begin_end(begin_line, end_line):
    return [
        {"kind": "begin", "text": "/*", "line": begin_line},
        {"kind": "end", "text": "*/", "line": end_line},
    ]


@pytest.mark.parametrize("raw", [
    dict(FOO, methods=[{"open": 2, "close": 12}]),
    dict(FOO, methods=[{"open": 7, "close": 10}]),
    dict(FOO, methods=[{"open": "2", "close": 5}]),
    dict(FOO, methods=[{"open": True, "close": 5}]),
    dict(FOO, comments=begin_end("1", 1)),
    dict(FOO, comments=begin_end(1, 1.0)),
    dict(FOO, comments=begin_end(True, 1)),
    dict(FOO, comments=[{"kind": "begin", "text": 5, "line": 1}]),
    dict(FOO, lines="class Foo {}"),
    dict(FOO, lines=["class Foo {", 2]),
])
def test_documents_with_wrong_types_or_ranges(raw):
    with pytest.raises(DocumentError):
        parse_document(raw)


def test_span_ending_on_last_line_is_accepted():
    doc = parse_document(dict(FOO, methods=[{"open": 7, "close": 9}]))
    assert doc.methods[0].last == 8


def test_main_skips_dump_with_span_past_end_of_file(tmp_path, capsys):
    code = main([str(dump(tmp_path, dict(FOO, methods=[{"open": 2, "close": 12}])))])
    assert code == 2
    assert "Findings: 0" in capsys.readouterr().out


def test_load_list_of_documents(tmp_path):
    docs = load_documents(dump(tmp_path, [FOO, dict(FOO, path="Bar.java")]))
    assert [d.path for d in docs] == ["Foo.java", "Bar.java"]


def test_main_reports_findings(tmp_path, capsys):
    code = main([str(dump(tmp_path, FOO)), "--format", r"^/\*.*\*/$", "--message", "one-liner"])
    out = capsys.readouterr().out
    assert code == 1
    assert "Foo.java:6: one-liner" in out
    assert f"Foo.java:4: {MESSAGE}" in out
    assert "Findings: 2" in out


def test_main_clean_file(tmp_path, capsys):
    clean = dict(FOO, lines=FOO["lines"][:3] + ["        b();"] + FOO["lines"][4:], comments=[])
    assert main([str(dump(tmp_path, clean))]) == 0
    assert "Findings: 0" in capsys.readouterr().out


def test_main_config_error(tmp_path):
    assert main([str(dump(tmp_path, FOO)), "--format", "("]) == 2


def test_main_skips_broken_document(tmp_path, capsys):
    broken = dict(FOO, path="Broken.java", comments=[{"kind": "content", "text": "x"}])
    code = main([str(dump(tmp_path, [broken, FOO]))])
    out = capsys.readouterr().out
    assert code == 2
    assert "Broken.java" not in out
    assert f"Foo.java:4: {MESSAGE}" in out


def test_main_info(capsys):
    assert main(["--info"]) == 0
    assert "SingleLineCommentCheck" in capsys.readouterr().out
