import csv
from io import StringIO

EXPORT_HEADER = ["ID", "Name", "Email", "Department", "Semester", "Roll", "Phone", "Gender"]
IMPORT_HEADER = ["Name", "Email", "Phone", "Department", "Semester", "Roll", "Gender"]
DEFAULT_DEPARTMENT = "Computer Science"
DEFAULT_SEMESTER = 1


def export_students_csv(students):
    buf = StringIO()
    writer = csv.writer(buf)
    writer.writerow(EXPORT_HEADER)
    for s in students:
        writer.writerow([s.id, s.name, s.email, s.department, s.semester, s.roll, s.phone, s.gender])
    return buf.getvalue()


def parse_student_rows(text):
    """
    Yields (line_number, payload) for each data row of an import file.
    payload is None when the row lacks a Name or an Email.
    """
    reader = csv.DictReader(StringIO(text.strip()))
    if reader.fieldnames:
        reader.fieldnames = [(h or "").strip() for h in reader.fieldnames]
    for line_number, row in enumerate(reader, start=2):
        row = {k: (v or "").strip() for k, v in row.items() if k}
        if not row.get("Name") or not row.get("Email"):
            yield line_number, None
            continue
        yield line_number, {
            "name": row["Name"],
            "email": row["Email"],
            "phone": row.get("Phone", ""),
            "department": row.get("Department") or DEFAULT_DEPARTMENT,
            "semester": row.get("Semester") or DEFAULT_SEMESTER,
            "roll": row.get("Roll", ""),
            "gender": row.get("Gender", ""),
        }
