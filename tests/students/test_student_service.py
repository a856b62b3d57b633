import pytest

from conftest import InMemoryStudents
from src.coaching_attendance.coaching_attendance.core.exceptions import NotFoundError, ValidationError
from src.coaching_attendance.coaching_attendance.students.service import StudentService


def test_create_student_uppercases_name_and_drops_placeholder_roll():
    repo = InMemoryStudents()
    svc = StudentService(repo)

    sid = svc.create_student(name="  jane smith ", batch="n1", sex="female", roll_number="00")

    s = repo.get_by_id(sid)
    assert s.name == "JANE SMITH"
    assert s.batch == "N1"
    assert s.sex == "Female"
    assert s.roll_number is None


@pytest.mark.parametrize(
    "name,batch,sex",
    [("", "S1", "Male"), ("A", "X9", "Male"), ("A", "S1", "Unknown")],
)
def test_create_student_rejects_invalid_input(name, batch, sex):
    svc = StudentService(InMemoryStudents())

    with pytest.raises(ValidationError):
        svc.create_student(name=name, batch=batch, sex=sex)


def test_list_by_batch_is_in_roster_order(roster):
    svc = StudentService(InMemoryStudents(roster))

    names = [s.name for s in svc.list_students(batch="S1")]

    assert names == ["ANJALI P", "DIYA S", "ARJUN M", "RAHUL K"]


def test_search_matches_name_batch_or_roll(roster):
    svc = StudentService(InMemoryStudents(roster))

    assert {s.student_id for s in svc.search("n1")} == {"n1", "n2"}
    assert [s.student_id for s in svc.search("diya")] == ["f2"]
    assert [s.student_id for s in svc.search("7")] == ["m2"]


def test_update_and_delete(roster):
    repo = InMemoryStudents(roster)
    svc = StudentService(repo)

    svc.update_student(student_id="m1", name="rahul kumar", batch="S2", sex="Male", roll_number="")
    assert repo.get_by_id("m1").name == "RAHUL KUMAR"
    assert repo.get_by_id("m1").batch == "S2"

    svc.delete_student("m1")
    assert repo.get_by_id("m1") is None

    with pytest.raises(NotFoundError):
        svc.delete_student("m1")
    with pytest.raises(NotFoundError):
        svc.update_student(student_id="nope", name="X", batch="S1", sex="Male")


def test_auto_assign_roll_numbers_overwrites_in_roster_order(roster):
    repo = InMemoryStudents(roster)
    svc = StudentService(repo)

    assert svc.auto_assign_roll_numbers("S1") == 4
    rolls = {s.student_id: s.roll_number for s in repo.list_by_batch("S1")}
    assert rolls == {"f1": "1", "f2": "2", "m2": "3", "m1": "4"}

    svc.auto_assign_roll_numbers("S1")
    assert {s.student_id: s.roll_number for s in repo.list_by_batch("S1")} == rolls


def test_auto_assign_on_empty_batch_fails():
    with pytest.raises(ValidationError):
        StudentService(InMemoryStudents()).auto_assign_roll_numbers("E1")


def test_import_csv_skips_invalid_rows_and_defaults_sex():
    repo = InMemoryStudents()
    svc = StudentService(repo)
    text = "\ufeffname,batch,sex,roll_number\njohn doe,S1,,1\n,S1,Male,2\nmary,ZZ,Female,\nanu,n2,Female,00\n"

    result = svc.import_csv(text)

    assert (result.imported, result.skipped) == (2, 2)
    by_name = {s.name: s for s in repo.list_all()}
    assert by_name["JOHN DOE"].sex == "Male"
    assert by_name["JOHN DOE"].roll_number == "1"
    assert by_name["ANU"].batch == "N2"
    assert by_name["ANU"].roll_number is None


def test_import_csv_without_valid_rows_fails():
    with pytest.raises(ValidationError):
        StudentService(InMemoryStudents()).import_csv("name,batch,sex,roll_number\n,S1,Male,\n")


def test_export_csv_has_header_and_rows(roster):
    svc = StudentService(InMemoryStudents(roster[:1]))

    lines = svc.export_csv().splitlines()

    assert lines[0] == "name,batch,sex,roll_number"
    assert lines[1] == "RAHUL K,S1,Male,"
