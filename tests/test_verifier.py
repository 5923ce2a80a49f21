"""
Tests for inference/verifier.py: the shared verification driver.
"""

import dataclasses
import logging

import pytest

from inference import registry
from inference.base import VerdictKind, VerificationResult
from inference.claim import Claim, Premise
from inference.config import VerifierConfig
from inference.registry import RuleId
from inference.verifier import RuleVerifier, default_verifier, suggest_auto_fill, verify_step
from logic.errors import UnknownRule
from logic.expr import atom, conj, disj, iff, implies, neg

P, Q, R, S = (atom(name) for name in "PQRS")


def plain(*exprs):
    return [Premise.plain(e) for e in exprs]


class TestConjunctionProperties:
    """Conjunction matching is order-insensitive."""

    def test_premises_in_order(self):
        assert verify_step(RuleId.CONJUNCTION, conj(P, Q), plain(P, Q)).is_valid

    def test_conclusion_swapped(self):
        assert verify_step(RuleId.CONJUNCTION, conj(Q, P), plain(P, Q)).is_valid

    def test_compound_operands(self):
        a, b = implies(P, Q), neg(R)
        assert verify_step(RuleId.CONJUNCTION, conj(b, a), plain(a, b)).is_valid


class TestSimplificationProperties:

    def test_either_conjunct(self):
        a, b = implies(P, Q), neg(R)
        assert verify_step(RuleId.SIMPLIFICATION, a, plain(conj(a, b))).is_valid
        assert verify_step(RuleId.SIMPLIFICATION, b, plain(conj(a, b))).is_valid

    def test_non_conjunct_named(self):
        result = verify_step(RuleId.SIMPLIFICATION, S, plain(conj(P, Q)))
        assert result.kind is VerdictKind.RULE_VIOLATION
        assert "S" in result.diagnostic

    def test_double_negation_both_directions(self):
        premise = plain(conj(neg(neg(P)), Q))
        assert verify_step(RuleId.SIMPLIFICATION, neg(neg(P)), premise).is_valid
        assert verify_step(RuleId.SIMPLIFICATION, P, premise).is_valid
        assert verify_step(RuleId.SIMPLIFICATION, neg(neg(Q)), plain(conj(P, Q))).is_valid


class TestImplicationProperties:

    @pytest.mark.parametrize("order", [(0, 1), (1, 0)])
    def test_hypothetical_syllogism_either_order(self, order):
        premises = [implies(P, Q), implies(Q, R)]
        ordered = plain(*(premises[i] for i in order))
        assert verify_step(RuleId.HYPOTHETICAL_SYLLOGISM, implies(P, R), ordered).is_valid

    def test_hypothetical_syllogism_no_chain(self):
        result = verify_step(
            RuleId.HYPOTHETICAL_SYLLOGISM,
            implies(P, S),
            plain(implies(P, Q), implies(R, S)),
        )
        assert result.kind is VerdictKind.RULE_VIOLATION
        assert result.diagnostic.startswith("Invalid application")

    def test_modus_ponens(self):
        assert verify_step(RuleId.MODUS_PONENS, Q, plain(implies(P, Q), P)).is_valid

    def test_modus_tollens(self):
        assert verify_step(RuleId.MODUS_TOLLENS, neg(P), plain(implies(P, Q), neg(Q))).is_valid

    def test_denying_the_antecedent(self):
        result = verify_step(RuleId.MODUS_TOLLENS, neg(Q), plain(implies(P, Q), neg(P)))
        assert not result.is_valid


class TestShapeGuard:
    """A premise-count or premise-kind mismatch never reaches the rule's check."""

    @pytest.mark.parametrize("rule_id", list(RuleId), ids=lambda r: r.value)
    @pytest.mark.parametrize("delta", [-1, 1])
    def test_wrong_count_skips_check(self, monkeypatch, verifier, rule_id, delta):
        calls = []

        def spy(conclusion, premises):
            calls.append((conclusion, premises))
            return None

        spy_rule = dataclasses.replace(rule_id.rule, check=spy)
        monkeypatch.setitem(registry._RULES, rule_id, spy_rule)

        conclusion = conj(P, Q)
        expected = spy_rule.required_premise_count(Claim(conclusion, ()))
        premises = plain(*[P] * (expected + delta))

        result = verifier.verify_step(rule_id, conclusion, premises)
        assert result.kind is VerdictKind.PREMISE_SHAPE_MISMATCH
        assert result.rule == spy_rule.name
        assert calls == []

    def test_subproof_in_plain_slot(self, verifier):
        result = verifier.verify_step(
            RuleId.MODUS_PONENS,
            Q,
            [Premise.subproof([P], implies(P, Q)), Premise.plain(P)],
        )
        assert result.kind is VerdictKind.PREMISE_SHAPE_MISMATCH
        assert "Premise 1" in result.diagnostic

    def test_plain_in_subproof_slot(self, verifier):
        result = verifier.verify_step(RuleId.CONDITIONAL_PROOF, implies(P, Q), plain(Q))
        assert result.kind is VerdictKind.PREMISE_SHAPE_MISMATCH
        assert "must be a subproof" in result.diagnostic

    def test_conditional_proof_with_subproof(self, verifier):
        result = verifier.verify_step(
            RuleId.CONDITIONAL_PROOF, implies(P, Q), [Premise.subproof([P], Q)]
        )
        assert result.is_valid

    def test_case_count_follows_cited_disjunction(self, verifier):
        cases = [Premise.subproof([P], S), Premise.subproof([Q], S)]
        short = verifier.verify_step(
            RuleId.DISJUNCTION_ELIMINATION, S, [Premise.plain(disj(P, Q, R))] + cases
        )
        assert short.kind is VerdictKind.PREMISE_SHAPE_MISMATCH
        assert short.diagnostic == (
            "Too few premises for Disjunction Elimination (∨ Elim) (expected: 4, provided: 3)."
        )
        full = verifier.verify_step(
            RuleId.DISJUNCTION_ELIMINATION,
            S,
            [Premise.plain(disj(P, Q, R))] + cases + [Premise.subproof([R], S)],
        )
        assert full.is_valid

    def test_biconditional_round_trip(self, verifier):
        introduced = verifier.verify_step(
            RuleId.BICONDITIONAL_INTRODUCTION, iff(P, Q), plain(implies(Q, P), implies(P, Q))
        )
        eliminated = verifier.verify_step(RuleId.BICONDITIONAL_ELIMINATION, P, plain(iff(P, Q), Q))
        assert introduced.is_valid
        assert eliminated.is_valid


class TestDriver:
    """Test RuleVerifier behaviour shared by every rule."""

    def test_idempotent(self, verifier):
        claim = Claim(Q, tuple(plain(implies(P, Q), P)), RuleId.MODUS_PONENS)
        snapshot = claim.to_dict()
        first = verifier.verify(claim)
        second = verifier.verify(claim)
        assert first == second
        assert claim.to_dict() == snapshot

    def test_rule_violation_verbatim(self, verifier):
        claim = Claim(R, tuple(plain(implies(P, Q), P)), RuleId.MODUS_PONENS)
        result = verifier.verify(claim)
        assert result.kind is VerdictKind.RULE_VIOLATION
        assert result.diagnostic == "The conclusion R does not match the consequent of P → Q."

    def test_string_identifier(self, verifier):
        assert verifier.verify_step("modus_ponens", Q, plain(implies(P, Q), P)).is_valid

    def test_unknown_rule(self, verifier):
        with pytest.raises(UnknownRule):
            verifier.verify_step("cut", Q, plain(P))

    def test_claim_without_rule(self, verifier):
        with pytest.raises(UnknownRule):
            verifier.verify(Claim(Q, tuple(plain(P))))

    def test_result_to_dict(self):
        result = verify_step(RuleId.REITERATION, Q, plain(P))
        assert result.to_dict() == {
            "kind": "rule_violation",
            "rule": "Reiteration",
            "diagnostic": result.diagnostic,
            "is_valid": False,
        }

    def test_valid_result(self):
        result = verify_step(RuleId.REITERATION, P, plain(P))
        assert result == VerificationResult(VerdictKind.VALID, "Reiteration")
        assert result.diagnostic is None


class TestLogging:

    def test_shape_mismatch_logged_at_info(self, verifier, caplog):
        with caplog.at_level(logging.INFO, logger="inference.verifier"):
            verifier.verify_step(RuleId.MODUS_PONENS, Q, plain(P))
        assert "[VERIFY] modus_ponens premise shape mismatch" in caplog.text

    def test_shape_mismatch_quiet_when_disabled(self, caplog):
        quiet = RuleVerifier(VerifierConfig(log_rejections=False))
        with caplog.at_level(logging.INFO, logger="inference.verifier"):
            quiet.verify_step(RuleId.MODUS_PONENS, Q, plain(P))
        assert caplog.text == ""

    def test_rejection_logged_at_debug(self, verifier, caplog):
        with caplog.at_level(logging.DEBUG, logger="inference.verifier"):
            verifier.verify_step(RuleId.DOUBLE_NEGATION, P, plain(neg(P)))
        assert "[VERIFY] double_negation rejected P" in caplog.text


class TestSuggestions:

    def test_rule_without_auto_fill(self):
        assert suggest_auto_fill(RuleId.ADDITION, plain(P)) is None

    def test_premises_not_matching(self):
        assert suggest_auto_fill(RuleId.MODUS_PONENS, plain(P, Q)) is None

    def test_suggestions(self):
        assert list(suggest_auto_fill("simplification", plain(conj(P, Q)))) == ["P", "Q"]

    def test_capped(self):
        capped = RuleVerifier(VerifierConfig(max_suggestions=2))
        assert list(capped.suggest(RuleId.SIMPLIFICATION, plain(conj(P, Q, R, S)))) == ["P", "Q"]

    def test_zero_cap(self):
        capped = RuleVerifier(VerifierConfig(max_suggestions=0))
        assert list(capped.suggest(RuleId.SIMPLIFICATION, plain(conj(P, Q)))) == []


class TestDefaultVerifier:

    def test_reused(self):
        assert default_verifier() is default_verifier()

    def test_reads_environment(self, monkeypatch, tmp_path):
        path = tmp_path / "verifier.yaml"
        path.write_text("autofill:\n  max_suggestions: 1\n", encoding="utf-8")
        monkeypatch.setenv("ARIS_VERIFIER_CONFIG", str(path))
        assert default_verifier().config.max_suggestions == 1
        assert list(suggest_auto_fill(RuleId.SIMPLIFICATION, plain(conj(P, Q)))) == ["P"]
