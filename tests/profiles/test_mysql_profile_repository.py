import json

from src.hr_admin.hr_admin.core.enums import ProfileSection, Role
from src.hr_admin.hr_admin.profiles.mysql_profile_repository import MySQLProfileRepository


def test_get_decodes_sections(scripted_db):
    db = scripted_db(
        {
            "SELECT user_id, full_name": {
                "user_id": 2,
                "full_name": "Sara Khan",
                "email": "sara.khan@example.com",
                "department": "Engineering",
                "job_title": None,
                "role": "employee",
            },
            "SELECT section, details": {"section": "contact", "details": '{"current_city": "Lahore"}'},
        }
    )
    profile = MySQLProfileRepository(db).get(2)

    assert profile.role == Role.EMPLOYEE
    assert profile.section(ProfileSection.CONTACT) == {"current_city": "Lahore"}
    assert profile.section(ProfileSection.BANK) == {}


def test_save_section_writes_employee_columns_and_details_together(scripted_db):
    db = scripted_db({"SELECT user_id FROM employees": {"user_id": 2}})
    repo = MySQLProfileRepository(db)

    ok = repo.save_section(
        user_id=2,
        section=ProfileSection.CONTACT,
        details={"phone_number1": "03001234567"},
        employee_fields={"email": "sara@example.com", "role": "admin"},
    )

    assert ok is True
    statements = db.statements()
    assert statements[0].endswith("FOR UPDATE")
    assert statements[1] == "UPDATE employees SET email=%s WHERE user_id=%s"
    assert statements[2].startswith("INSERT INTO employee_profiles")
    _, params = db.cursor.executed[2]
    assert params[:2] == (2, "contact")
    assert json.loads(params[2]) == {"phone_number1": "03001234567"}
    assert len(db.connections) == 1
    assert db.connections[0].commits == 1


def test_save_section_for_missing_employee(scripted_db):
    db = scripted_db()
    ok = MySQLProfileRepository(db).save_section(user_id=9, section=ProfileSection.BANK, details={})
    assert ok is False
    assert len(db.statements()) == 1
