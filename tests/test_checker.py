import S7_Checker


def test_sympy_digit_sum():
    assert S7_Checker.sympy_digit_sum(97) == 13
    assert S7_Checker.sympy_digit_sum(343) == 1


def test_sympy_conjecture_holds():
    assert S7_Checker.sympy_conjecture_holds(1)
    assert S7_Checker.sympy_conjecture_holds(4)
    assert S7_Checker.sympy_conjecture_holds(27)
    assert not S7_Checker.sympy_conjecture_holds(12)
    assert not S7_Checker.sympy_conjecture_holds(175)


def test_predicates_match_sympy():
    assert S7_Checker.check_predicates(2000) == []


def test_conjecture_up_to_10000():
    checked, violations = S7_Checker.check_conjecture(10_000)
    assert checked == 1229
    assert violations == []


def test_main_exit_status(capsys):
    assert S7_Checker.main(["1000", "200"]) == 0
    out = capsys.readouterr().out
    assert "Checked 168 primes, 0 violation(s)" in out
    assert "agrees with sympy" in out
