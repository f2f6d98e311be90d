import logging

from condtrail.analysis.analyzer import ScriptAnalyzer, analyze_conditional_calls

SAMPLE = """
function foo(a, b) {
  var c = 100
  if (c > a) {
    if (a > 200) { alert(1) }
    else if (a > 100) { alert(2) }
    else { alert(3) }
  }
}
"""

NESTED = """
function foo(a, b) {
    var c = 100
    if(c > a){
        if( a > 200){
            alert(1)
            alert(4)
        }else if(a > 100){
            alert(2)
            if(b > 200){
                alert(5)
            }else{
                alert(6)
            }
            alert(7)
        }else{
            alert(3)

            if(b > 200){
                alert(8)
            }else{
                alert(9)
            }
            alert(10)
        }
    }
}
"""


def _by_call(records):
    return {r["call"]: r["condition"] for r in records}


def test_end_to_end_example():
    records = analyze_conditional_calls(SAMPLE, "foo", ["alert"])
    assert records == [
        {"call": "alert(1)", "condition": "100 mayor que a y además a mayor que 200"},
        {"call": "alert(2)",
         "condition": "100 mayor que a y además no(a mayor que 200) y además a mayor que 100"},
        {"call": "alert(3)",
         "condition": "100 mayor que a y además no(a mayor que 200) y además no(a mayor que 100)"},
    ]


def test_nested_branches_inside_else_if_and_else():
    conditions = _by_call(analyze_conditional_calls(NESTED, "DV", ["alert"]))
    outer = "100 mayor que a"
    else_if = f"{outer} y además no(a mayor que 200) y además a mayor que 100"
    otherwise = f"{outer} y además no(a mayor que 200) y además no(a mayor que 100)"

    assert conditions["alert(1)"] == f"{outer} y además a mayor que 200"
    assert conditions["alert(4)"] == f"{outer} y además a mayor que 200"
    assert conditions["alert(2)"] == else_if
    assert conditions["alert(5)"] == f"{else_if} y además b mayor que 200"
    assert conditions["alert(6)"] == f"{else_if} y además no(b mayor que 200)"
    assert conditions["alert(7)"] == else_if
    assert conditions["alert(3)"] == otherwise
    assert conditions["alert(8)"] == f"{otherwise} y además b mayor que 200"
    assert conditions["alert(9)"] == f"{otherwise} y además no(b mayor que 200)"
    assert conditions["alert(10)"] == otherwise


def test_records_follow_document_order():
    records = analyze_conditional_calls(NESTED, "DV", ["alert"])
    assert [r["call"] for r in records] == [
        "alert(1)", "alert(4)", "alert(2)", "alert(5)", "alert(6)",
        "alert(7)", "alert(3)", "alert(8)", "alert(9)", "alert(10)",
    ]


def test_without_conditionals_condition_is_none():
    source = "var x = 1\nalert(x)\nDV.setFieldValue('C1', 2)\n"
    records = analyze_conditional_calls(source, "DV", ["alert", "setFieldValue"])
    assert len(records) == 2
    assert all(r["condition"] is None for r in records)


def test_member_calls_require_namespace():
    source = """
    if (x == 1) {
        DV.setFieldValue('C1', 0)
        other.setFieldValue('C2', 0)
        DV.unknown('C3')
        DV['setFieldValue']('C4')
    }
    """
    records = analyze_conditional_calls(source, "DV", ["setFieldValue"])
    assert records == [
        {"call": "DV.setFieldValue('C1', 0)", "condition": "x igual a 1"},
    ]


def test_calls_after_if_return_to_parent_condition():
    source = """
    if (a) {
        if (b) { alert(1) }
        alert(2)
    }
    alert(3)
    """
    conditions = _by_call(analyze_conditional_calls(source, "DV", ["alert"]))
    assert conditions == {
        "alert(1)": "a y además b",
        "alert(2)": "a",
        "alert(3)": None,
    }


def test_long_else_if_chain_negates_each_sibling():
    source = """
    if (n == 1) { alert(1) }
    else if (n == 2) { alert(2) }
    else if (n == 3) { alert(3) }
    else { alert(4) }
    """
    conditions = _by_call(analyze_conditional_calls(source, "DV", ["alert"]))
    assert conditions["alert(3)"] == "no(n igual a 1) y además no(n igual a 2) y además n igual a 3"
    assert conditions["alert(4)"] == "no(n igual a 1) y además no(n igual a 2) y además no(n igual a 3)"
    for call in ("alert(2)", "alert(3)", "alert(4)"):
        assert conditions[call].startswith("no(n igual a 1)")


def test_else_without_block():
    source = "if (a > 1) alert(1); else alert(2);"
    conditions = _by_call(analyze_conditional_calls(source, "DV", ["alert"]))
    assert conditions == {
        "alert(1)": "a mayor que 1",
        "alert(2)": "no(a mayor que 1)",
    }


def test_bindings_are_flat_and_last_declaration_wins():
    source = """
    var limit = 10
    function f() { var limit = 20 }
    if (x > limit) { alert(1) }
    """
    records = analyze_conditional_calls(source, "DV", ["alert"])
    assert records[0]["condition"] == "x mayor que 20"


def test_parse_failure_returns_empty_list(caplog):
    with caplog.at_level(logging.ERROR):
        records = analyze_conditional_calls("if (a > { alert(1) ", "DV", ["alert"])
    assert records == []
    assert "Error parsing script" in caplog.text


def test_analyzer_instance_is_reusable():
    analyzer = ScriptAnalyzer("DV", ["alert"])
    first = analyzer.analyze(SAMPLE)
    second = analyzer.analyze(SAMPLE)
    assert first == second
    assert analyzer.analyze("if (b) { alert(9) }") == [{"call": "alert(9)", "condition": "b"}]


def test_switch_does_not_hide_calls():
    source = "if (a > 1) { alert(1) }\nswitch (x) { case 1: alert(2); break; }"
    records = analyze_conditional_calls(source, "DV", ["alert"])
    assert records == [
        {"call": "alert(1)", "condition": "a mayor que 1"},
        {"call": "alert(2)", "condition": None},
    ]


def test_switch_cases_inherit_enclosing_branch():
    source = """
    if (tipo != 0) {
        switch (tipo) {
            case 1: DV.setFieldVisible('C1', true); break
            default: alert('otro')
        }
    }
    """
    conditions = _by_call(analyze_conditional_calls(source, "DV", ["alert", "setFieldVisible"]))
    assert conditions == {
        "DV.setFieldVisible('C1', true)": "tipo distinto de 0",
        "alert('otro')": "tipo distinto de 0",
    }


def test_object_literal_before_branch():
    records = analyze_conditional_calls("var o = {}\nif (a > 1) { alert(1) }", "DV", ["alert"])
    assert records == [{"call": "alert(1)", "condition": "a mayor que 1"}]


def test_object_literal_argument_is_kept_in_call_text():
    source = "if (ok) { DV.setFieldValue('C1', {valor: 1, 'modo': m}) }"
    records = analyze_conditional_calls(source, "DV", ["setFieldValue"])
    assert records == [{"call": "DV.setFieldValue('C1', {valor: 1, 'modo': m})", "condition": "ok"}]


def test_for_in_body_calls_are_collected():
    source = """
    for (var k in campos) {
        if (campos[k] == '') { alert(k) }
    }
    """
    records = analyze_conditional_calls(source, "DV", ["alert"])
    assert records == [{"call": "alert(k)", "condition": "campos[k] igual a ''"}]


def test_bitwise_condition():
    records = analyze_conditional_calls("if (a & 1) { alert(1) }", "DV", ["alert"])
    assert records == [{"call": "alert(1)", "condition": "a & 1"}]


def test_regex_condition():
    records = analyze_conditional_calls("if (/x/.test(s)) { alert(1) } else { alert(2) }", "DV", ["alert"])
    assert records == [
        {"call": "alert(1)", "condition": "/x/.test(s)"},
        {"call": "alert(2)", "condition": "no(/x/.test(s))"},
    ]


def test_throw_inside_branch():
    source = """
    if (!valido) {
        alert('dato invalido')
        throw new Error('invalido')
    }
    alert('ok')
    """
    conditions = _by_call(analyze_conditional_calls(source, "DV", ["alert"]))
    assert conditions == {"alert('dato invalido')": "no valido", "alert('ok')": None}


def test_for_without_in_is_a_parse_failure(caplog):
    with caplog.at_level(logging.ERROR):
        records = analyze_conditional_calls("for (a) { alert(1) }", "DV", ["alert"])
    assert records == []
    assert "Error parsing script" in caplog.text
