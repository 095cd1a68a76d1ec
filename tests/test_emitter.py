# tests/test_emitter.py
# Tests for the metric emitter and descriptors.

"""
Unit tests for emit() and build_descriptors().

Tests cover:
- Cross-product emission with zero-valued combinations
- Providers absent from the aggregate are never emitted
- Descriptor naming and labels
"""

from openshift_audit_exporter.collector.attempts import LoginAttempts
from openshift_audit_exporter.collector.emitter import ListSink, build_descriptors, emit
from openshift_audit_exporter.models import OutcomeClass


class TestDescriptors:
    """Tests for build_descriptors()."""

    def test_default_names(self):
        """Test fully qualified names for both counters."""
        descriptors = build_descriptors()
        assert descriptors[OutcomeClass.SUCCEEDED].fq_name == (
            "openshift_audit_login_attempts_successful"
        )
        assert descriptors[OutcomeClass.FAILED].fq_name == "openshift_audit_login_attempts_failed"

    def test_custom_namespace_and_labels(self):
        """Test the namespace override and the fixed label set."""
        descriptor = build_descriptors("acme")[OutcomeClass.FAILED]
        assert descriptor.fq_name == "acme_login_attempts_failed"
        assert descriptor.label_names == ("subject", "provider")
        assert descriptor.outcome == OutcomeClass.FAILED


class TestEmit:
    """Tests for emit()."""

    def test_empty_aggregate_emits_nothing(self, sink):
        """Test that absence from the aggregate means no observation."""
        descriptor = build_descriptors()[OutcomeClass.SUCCEEDED]
        assert emit(sink, LoginAttempts(), descriptor) == 0
        assert len(sink) == 0

    def test_single_pair(self, sink):
        """Test one observation carrying the current count."""
        descriptor = build_descriptors()[OutcomeClass.SUCCEEDED]
        attempts = LoginAttempts.from_pairs([("alice", "htpasswd")] * 3)

        assert emit(sink, attempts, descriptor) == 1
        observation = sink.observations[0]
        assert observation.subject == "alice"
        assert observation.provider == "htpasswd"
        assert observation.value == 3.0
        assert observation.outcome == OutcomeClass.SUCCEEDED
        assert observation.labels == {"subject": "alice", "provider": "htpasswd"}

    def test_cross_product_with_zeros(self, sink):
        """Test that every subject is reported for every provider seen in the cycle."""
        descriptor = build_descriptors()[OutcomeClass.FAILED]
        attempts = LoginAttempts.from_pairs([("alice", "htpasswd"), ("bob", "github")])

        assert emit(sink, attempts, descriptor) == 4
        values = {(o.subject, o.provider): o.value for o in sink.observations}
        assert values == {
            ("alice", "github"): 0.0,
            ("alice", "htpasswd"): 1.0,
            ("bob", "github"): 1.0,
            ("bob", "htpasswd"): 0.0,
        }
        assert {(o.subject, o.provider) for o in sink.non_zero()} == {
            ("alice", "htpasswd"),
            ("bob", "github"),
        }

    def test_emission_order_is_sorted(self, sink):
        """Test deterministic subject-major ordering."""
        descriptor = build_descriptors()[OutcomeClass.SUCCEEDED]
        attempts = LoginAttempts.from_pairs([("bob", "ldap"), ("alice", "github")])
        emit(sink, attempts, descriptor)
        assert [(o.subject, o.provider) for o in sink.observations] == [
            ("alice", "github"),
            ("alice", "ldap"),
            ("bob", "github"),
            ("bob", "ldap"),
        ]

    def test_emit_does_not_modify_aggregate(self, sink):
        """Test that the emitter is a pure projection."""
        descriptor = build_descriptors()[OutcomeClass.SUCCEEDED]
        attempts = LoginAttempts.from_pairs([("alice", "htpasswd"), ("bob", "github")])
        before = attempts.to_dict()
        emit(sink, attempts, descriptor)
        assert attempts.to_dict() == before

    def test_list_sink_forward(self, sink):
        """Test replaying buffered observations into another sink."""
        descriptor = build_descriptors()[OutcomeClass.SUCCEEDED]
        emit(sink, LoginAttempts.from_pairs([("alice", "htpasswd")]), descriptor)
        target = ListSink()
        sink.forward(target)
        assert target.observations == sink.observations
        assert target.by_outcome(OutcomeClass.SUCCEEDED) == sink.observations
        assert target.by_outcome(OutcomeClass.FAILED) == []
