from __future__ import annotations

import pytest

from shootbudget.core.domain import ALLOWED_TRANSITIONS, ApprovalStatus
from shootbudget.core.exceptions import (
    AuthError,
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from shootbudget.core.services.approval import as_approval_status
from shootbudget.core.services.auth import build_principal
from shootbudget.infra.services import build_service_graph

PROJECT = "proj-approvals"


def _login(services, user_id: str, role: str, display_name: str | None = None):
    services["user_session"].set_principal(
        build_principal(user_id, user_id, role_names=[role], display_name=display_name)
    )


def _seed_budget(services, project_id: str = PROJECT):
    lines = services["budget_line_service"]
    crew = lines.add_category(project_id, "Crew", phase="production")
    post = lines.add_category(project_id, "Post", phase="post-production")
    lines.add_item(project_id, crew.id, "Gaffer", estimated_amount=3000.0)
    lines.add_item(project_id, post.id, "Colour grade", estimated_amount=2000.0)


def _submit(services, title: str = "Q1 Update", **kwargs):
    _login(services, "u-coord", "coordinator", display_name="Casey Coordinator")
    _seed_budget(services)
    return services["approval_service"].submit_current_for_approval(PROJECT, title, **kwargs)


def test_submit_and_approve_with_comment(services):
    approval = _submit(services)
    assert approval.status == ApprovalStatus.PENDING
    assert approval.total_estimated == 5000
    assert approval.submitted_by_name == "Casey Coordinator"

    _login(services, "u-prod", "producer", display_name="Pat Producer")
    decided = services["approval_service"].approve(approval.id, "Looks good")

    fetched = services["approval_service"].get_approval(approval.id)
    assert decided.status == ApprovalStatus.APPROVED
    assert fetched.status == ApprovalStatus.APPROVED
    assert fetched.reviewed_by == "u-prod"
    assert fetched.reviewed_by_name == "Pat Producer"
    assert fetched.reviewed_at is not None
    assert [c.message for c in fetched.comments] == ["Looks good"]
    assert fetched.comments[0].user_name == "Pat Producer"
    assert fetched.version == approval.version + 1


def test_approve_without_comment_adds_no_comment(services):
    approval = _submit(services)
    _login(services, "u-prod", "producer")

    services["approval_service"].approve(approval.id, "   ")

    assert services["approval_service"].get_approval(approval.id).comments == []


def test_submission_captures_summary_fields(services):
    approval = _submit(services, description="Reforecast after week one", previous_total=4500.0)
    fetched = services["approval_service"].get_approval(approval.id)

    assert fetched.title == "Q1 Update"
    assert fetched.description == "Reforecast after week one"
    assert fetched.category_count == 2
    assert fetched.item_count == 2
    assert fetched.affected_categories == ["Crew", "Post"]
    assert fetched.changes_summary == "2 categories, 2 line items"
    assert fetched.previous_total == 4500.0
    assert fetched.estimated_change == 500.0
    assert fetched.comments == []


def test_submission_requires_title(services):
    _login(services, "u-coord", "coordinator")

    with pytest.raises(ValidationError) as exc:
        services["approval_service"].submit_for_approval(PROJECT, [], [], "  ")

    assert exc.value.code == "APPROVAL_TITLE_REQUIRED"


def test_submission_requires_permission(services):
    _login(services, "u-view", "viewer")

    with pytest.raises(BusinessRuleError) as exc:
        services["approval_service"].submit_for_approval(PROJECT, [], [], "Nope")

    assert exc.value.code == "PERMISSION_DENIED"


def test_empty_rejection_reason_leaves_record_pending(services):
    approval = _submit(services)
    _login(services, "u-prod", "producer")

    with pytest.raises(ValidationError) as exc:
        services["approval_service"].reject(approval.id, "   ")

    assert exc.value.code == "REJECTION_REASON_REQUIRED"
    fetched = services["approval_service"].get_approval(approval.id)
    assert fetched.status == ApprovalStatus.PENDING
    assert fetched.comments == []


def test_reject_records_reason_as_comment(services):
    approval = _submit(services)
    _login(services, "u-prod", "producer")

    services["approval_service"].reject(approval.id, "Over the cap")

    fetched = services["approval_service"].get_approval(approval.id)
    assert fetched.status == ApprovalStatus.REJECTED
    assert [c.message for c in fetched.comments] == ["Rejected: Over the cap"]


def test_request_revision_records_feedback(services):
    approval = _submit(services)
    _login(services, "u-prod", "producer")

    services["approval_service"].request_revision(approval.id, "Split the post line")

    fetched = services["approval_service"].get_approval(approval.id)
    assert fetched.status == ApprovalStatus.REVISION_REQUESTED
    assert [c.message for c in fetched.comments] == ["Revision requested: Split the post line"]


def test_request_revision_requires_feedback(services):
    approval = _submit(services)
    _login(services, "u-prod", "producer")

    with pytest.raises(ValidationError) as exc:
        services["approval_service"].request_revision(approval.id, "")

    assert exc.value.code == "REVISION_FEEDBACK_REQUIRED"


@pytest.mark.parametrize("first", ["approve", "reject"])
def test_decided_approvals_cannot_transition_again(services, first):
    approval = _submit(services)
    _login(services, "u-prod", "producer")
    approvals = services["approval_service"]
    if first == "approve":
        approvals.approve(approval.id)
    else:
        approvals.reject(approval.id, "No")

    with pytest.raises(ConflictError) as exc:
        approvals.approve(approval.id)
    assert exc.value.code == "APPROVAL_ALREADY_DECIDED"

    with pytest.raises(ConflictError):
        approvals.request_revision(approval.id, "Try again")

    with pytest.raises(ConflictError):
        approvals.approve(approval.id, expected_status=approvals.get_approval(approval.id).status)


def test_revision_requested_needs_explicit_expected_status(services):
    approval = _submit(services)
    _login(services, "u-prod", "producer")
    approvals = services["approval_service"]
    approvals.request_revision(approval.id, "Tighten crew costs")

    with pytest.raises(ConflictError):
        approvals.approve(approval.id)

    approvals.approve(approval.id, "Fine as is", expected_status="revision_requested")

    fetched = approvals.get_approval(approval.id)
    assert fetched.status == ApprovalStatus.APPROVED
    assert [c.message for c in fetched.comments] == [
        "Revision requested: Tighten crew costs",
        "Fine as is",
    ]


def test_revision_requested_cannot_repeat(services):
    approval = _submit(services)
    _login(services, "u-prod", "producer")
    approvals = services["approval_service"]
    approvals.request_revision(approval.id, "First pass")

    with pytest.raises(ConflictError):
        approvals.request_revision(
            approval.id,
            "Second pass",
            expected_status=ApprovalStatus.REVISION_REQUESTED,
        )


def test_coordinator_cannot_review(services):
    approval = _submit(services)

    with pytest.raises(BusinessRuleError) as exc:
        services["approval_service"].approve(approval.id)

    assert exc.value.code == "PERMISSION_DENIED"
    assert services["approval_service"].get_approval(approval.id).status == ApprovalStatus.PENDING


def test_review_requires_login(services):
    approval = _submit(services)
    services["user_session"].clear()

    with pytest.raises(AuthError):
        services["approval_service"].approve(approval.id)


def test_custom_reviewer_predicate_is_used(session):
    def only_other_people(principal, approval):
        return principal.user_id != approval.submitted_by

    services = build_service_graph(session, reviewer_predicate=only_other_people).as_dict()
    approval = _submit(services)

    # the predicate ignores permissions but blocks self-review
    with pytest.raises(BusinessRuleError):
        services["approval_service"].approve(approval.id)

    _login(services, "u-other-coord", "coordinator")
    services["approval_service"].approve(approval.id)
    assert services["approval_service"].get_approval(approval.id).status == ApprovalStatus.APPROVED


def test_missing_approval_raises_not_found(services):
    _login(services, "u-prod", "producer")

    with pytest.raises(NotFoundError) as exc:
        services["approval_service"].approve("missing")

    assert exc.value.code == "APPROVAL_NOT_FOUND"


def test_comments_are_allowed_after_a_decision(services):
    approval = _submit(services)
    _login(services, "u-prod", "producer")
    approvals = services["approval_service"]
    approvals.reject(approval.id, "Too high")

    _login(services, "u-head", "department_head", display_name="Dana Head")
    comment = approvals.add_comment(approval.id, "Noted, will resubmit")

    fetched = approvals.get_approval(approval.id)
    assert fetched.status == ApprovalStatus.REJECTED
    assert [c.message for c in fetched.comments] == ["Rejected: Too high", "Noted, will resubmit"]
    assert fetched.comments[-1].id == comment.id
    assert fetched.comments[-1].user_name == "Dana Head"


def test_empty_comment_is_rejected(services):
    approval = _submit(services)

    with pytest.raises(ValidationError) as exc:
        services["approval_service"].add_comment(approval.id, "  ")

    assert exc.value.code == "COMMENT_MESSAGE_REQUIRED"


def test_viewer_cannot_comment(services):
    approval = _submit(services)
    _login(services, "u-view", "viewer")

    with pytest.raises(BusinessRuleError):
        services["approval_service"].add_comment(approval.id, "hello")


def test_terminal_statuses_have_no_onward_transitions():
    assert {s for s in ApprovalStatus if s.is_terminal} == {ApprovalStatus.APPROVED, ApprovalStatus.REJECTED}
    for status in ApprovalStatus:
        assert status.is_terminal == (not ALLOWED_TRANSITIONS[status])


def test_rejected_record_stays_rejected_even_when_named_as_expected(services):
    approval = _submit(services)
    _login(services, "u-prod", "producer")
    approvals = services["approval_service"]
    approvals.reject(approval.id, "Over budget")

    with pytest.raises(ConflictError) as exc:
        approvals.approve(approval.id, expected_status=ApprovalStatus.REJECTED)

    assert exc.value.code == "APPROVAL_ALREADY_DECIDED"
    assert "already rejected" in str(exc.value)
    assert approvals.get_approval(approval.id).status == ApprovalStatus.REJECTED


def test_approved_records_cannot_be_deleted(services):
    approval = _submit(services)
    _login(services, "u-prod", "producer")
    services["approval_service"].approve(approval.id)

    with pytest.raises(BusinessRuleError) as exc:
        services["approval_service"].delete_approval(approval.id)

    assert exc.value.code == "APPROVAL_DELETE_FORBIDDEN"
    assert services["approval_service"].get_approval(approval.id).status == ApprovalStatus.APPROVED


def test_delete_approval_removes_thread_and_is_idempotent(services):
    approval = _submit(services)
    approvals = services["approval_service"]
    approvals.add_comment(approval.id, "Draft note")

    approvals.delete_approval(approval.id)
    approvals.delete_approval(approval.id)

    with pytest.raises(NotFoundError):
        approvals.get_approval(approval.id)
    assert approvals.list_approvals(PROJECT) == []


def test_pending_count_and_status_filter(services):
    first = _submit(services, title="First")
    approvals = services["approval_service"]
    second = approvals.submit_current_for_approval(PROJECT, "Second")
    approvals.submit_current_for_approval(PROJECT, "Third")
    approvals.submit_current_for_approval("other-project", "Elsewhere")

    _login(services, "u-prod", "producer")
    approvals.approve(first.id)
    approvals.reject(second.id, "No")

    assert approvals.pending_count(PROJECT) == 1
    assert approvals.pending_count("other-project") == 1
    assert [a.title for a in approvals.list_approvals(PROJECT, status="ApprovalStatus.PENDING")] == ["Third"]
    assert [a.title for a in approvals.list_approvals(PROJECT, status=ApprovalStatus.APPROVED)] == ["First"]
    assert [a.title for a in approvals.list_approvals(PROJECT, status="rejected")] == ["Second"]
    assert {a.title for a in approvals.list_approvals(PROJECT)} == {"First", "Second", "Third"}


def test_status_parsing():
    assert as_approval_status(None) is None
    assert as_approval_status("PENDING") == ApprovalStatus.PENDING
    assert as_approval_status("ApprovalStatus.REVISION_REQUESTED") == ApprovalStatus.REVISION_REQUESTED
    assert as_approval_status(ApprovalStatus.APPROVED) == ApprovalStatus.APPROVED
    with pytest.raises(ValidationError) as exc:
        as_approval_status("archived")
    assert exc.value.code == "APPROVAL_STATUS_INVALID"
