from datetime import timedelta

import pytest
from sqlalchemy import select, func

from enquiry_tracker_svc.errors import NotFoundError, ValidationError
from enquiry_tracker_svc.models import ActivityLog, Enquiry, EnquiryStatus, User, UserRole
from enquiry_tracker_svc.models.base import utcnow
from enquiry_tracker_svc.schemas.enquiry import EnquiryCreate, EnquiryFilter, EnquiryUpdate
from enquiry_tracker_svc.services.enquiry_service import (
    create_enquiry,
    delete_enquiry,
    get_enquiry,
    list_enquiries,
    update_enquiry,
)


def add_user(db_session, email, role=UserRole.Staff, name="Staff"):
    user = User(email=email, hashed_password="h", name=name, role=role)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def add_enquiries(db_session, count, **fields):
    base = utcnow() - timedelta(hours=count)
    enquiries = []
    for i in range(count):
        data = {"customer_name": f"Customer {i}", "email": f"c{i}@example.com", "created_at": base + timedelta(minutes=i)}
        data.update(fields)
        enquiries.append(Enquiry(**data))
    db_session.add_all(enquiries)
    db_session.commit()
    return enquiries


def test_create_enquiry_defaults(db_session):
    creator = add_user(db_session, "creator@example.com")

    enquiry = create_enquiry(db_session, EnquiryCreate(customer_name="Acme", email="a@acme.com"), creator.id)

    assert enquiry.id is not None
    assert enquiry.status == EnquiryStatus.New
    assert enquiry.assigned_to_id is None
    assert enquiry.created_by_id == creator.id
    assert enquiry.phone is None


def test_create_enquiry_schema_rejects_short_name_and_bad_email():
    with pytest.raises(Exception):
        EnquiryCreate(customer_name="A", email="a@acme.com")
    with pytest.raises(Exception):
        EnquiryCreate(customer_name="Acme", email="not-an-email")


def test_list_enquiries_defaults_newest_first(db_session):
    add_enquiries(db_session, 3)

    page = list_enquiries(db_session, EnquiryFilter())

    assert page.total == 3
    assert page.page == 1
    assert page.pages == 1
    names = [e.customer_name for e in page.enquiries]
    assert names == ["Customer 2", "Customer 1", "Customer 0"]


def test_list_enquiries_ascending(db_session):
    add_enquiries(db_session, 3)

    page = list_enquiries(db_session, EnquiryFilter(sort="asc"))

    assert [e.customer_name for e in page.enquiries] == ["Customer 0", "Customer 1", "Customer 2"]


def test_list_enquiries_filters(db_session):
    staff = add_user(db_session, "s@example.com")
    creator = add_user(db_session, "creator@example.com")
    add_enquiries(db_session, 2, status=EnquiryStatus.Closed, assigned_to_id=staff.id)
    add_enquiries(db_session, 3, status=EnquiryStatus.New, created_by_id=creator.id)

    closed = list_enquiries(db_session, EnquiryFilter(status=EnquiryStatus.Closed))
    assert closed.total == 2
    assert all(e.status == EnquiryStatus.Closed for e in closed.enquiries)

    assigned = list_enquiries(db_session, EnquiryFilter(assigned_to=staff.id))
    assert assigned.total == 2
    assert all(e.assigned_to.id == staff.id for e in assigned.enquiries)

    created = list_enquiries(db_session, EnquiryFilter(created_by=creator.id))
    assert created.total == 3
    assert all(e.created_by.email == "creator@example.com" for e in created.enquiries)


def test_list_enquiries_search_is_case_insensitive_on_name_or_email(db_session):
    db_session.add_all(
        [
            Enquiry(customer_name="Acme Corp", email="info@acme.com"),
            Enquiry(customer_name="Globex", email="sales@ACMEPARTNER.com"),
            Enquiry(customer_name="Initech", email="hello@initech.com"),
        ]
    )
    db_session.commit()

    page = list_enquiries(db_session, EnquiryFilter(search="acme"))

    assert page.total == 2
    assert {e.customer_name for e in page.enquiries} == {"Acme Corp", "Globex"}


def test_pagination_pages_cover_total_without_duplicates(db_session):
    # identical timestamps force the id tie-breaker
    same_time = utcnow()
    db_session.add_all(
        [Enquiry(customer_name=f"Cust {i}", email=f"c{i}@example.com", created_at=same_time) for i in range(23)]
    )
    db_session.commit()

    first = list_enquiries(db_session, EnquiryFilter(limit=5))
    assert first.total == 23
    assert first.pages == 5

    seen = []
    for page_no in range(1, first.pages + 1):
        page = list_enquiries(db_session, EnquiryFilter(limit=5, page=page_no))
        seen.extend(e.id for e in page.enquiries)

    assert len(seen) == 23
    assert len(set(seen)) == 23


def test_list_enquiries_empty(db_session):
    page = list_enquiries(db_session, EnquiryFilter())
    assert page.total == 0
    assert page.pages == 0
    assert page.enquiries == []


def test_enquiry_filter_rejects_unknown_keys():
    with pytest.raises(Exception):
        EnquiryFilter(unknown="x")


def test_get_enquiry_not_found(db_session):
    with pytest.raises(NotFoundError):
        get_enquiry(db_session, 999)


def test_update_enquiry_applies_only_sent_fields(db_session):
    enquiry = add_enquiries(db_session, 1, phone="123", message="hello")[0]

    updated = update_enquiry(db_session, enquiry.id, EnquiryUpdate(status=EnquiryStatus.InProgress))

    assert updated.status == EnquiryStatus.InProgress
    assert updated.phone == "123"
    assert updated.message == "hello"
    assert updated.customer_name == "Customer 0"


def test_update_enquiry_status_is_not_journaled(db_session):
    enquiry = add_enquiries(db_session, 1)[0]

    update_enquiry(db_session, enquiry.id, EnquiryUpdate(status=EnquiryStatus.Closed))

    count = db_session.execute(select(func.count(ActivityLog.id))).scalar_one()
    assert count == 0


def test_update_enquiry_not_found(db_session):
    with pytest.raises(NotFoundError):
        update_enquiry(db_session, 12345, EnquiryUpdate(status=EnquiryStatus.Closed))


def test_update_enquiry_assigned_to_requires_staff(db_session):
    admin = add_user(db_session, "admin@example.com", role=UserRole.Admin)
    staff = add_user(db_session, "staff@example.com")
    enquiry = add_enquiries(db_session, 1)[0]

    with pytest.raises(ValidationError):
        update_enquiry(db_session, enquiry.id, EnquiryUpdate(assigned_to=admin.id))

    updated = update_enquiry(db_session, enquiry.id, EnquiryUpdate(assigned_to=staff.id))
    assert updated.assigned_to_id == staff.id

    cleared = update_enquiry(db_session, enquiry.id, EnquiryUpdate.model_validate({"assignedTo": None}))
    assert cleared.assigned_to_id is None


def test_update_schema_rejects_bad_status_and_null_name():
    with pytest.raises(Exception):
        EnquiryUpdate.model_validate({"status": "archived"})
    with pytest.raises(Exception):
        EnquiryUpdate.model_validate({"customerName": None})
    with pytest.raises(Exception):
        EnquiryUpdate.model_validate({"email": "nope"})


def test_delete_enquiry_keeps_activity_log(db_session):
    enquiry_id = add_enquiries(db_session, 1)[0].id
    db_session.add(ActivityLog(action="assigned", enquiry_id=enquiry_id, details="Assigned"))
    db_session.commit()

    delete_enquiry(db_session, enquiry_id)

    assert db_session.get(Enquiry, enquiry_id) is None
    remaining = db_session.execute(select(ActivityLog).where(ActivityLog.enquiry_id == enquiry_id)).scalars().all()
    assert len(remaining) == 1

    with pytest.raises(NotFoundError):
        delete_enquiry(db_session, enquiry_id)
