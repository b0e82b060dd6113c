import pytest
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile

from onduty.models import document_path, validate_document


@pytest.mark.parametrize("name,ctype", [
    ("letter.pdf", "application/pdf"),
    ("scan.JPG", "image/jpeg"),
    ("photo.png", "image/png"),
    ("photo.webp", "image/webp"),
])
def test_accepts_allowed_types(name, ctype):
    validate_document(SimpleUploadedFile(name, b"data", content_type=ctype))


@pytest.mark.parametrize("name", ["script.exe", "notes.txt", "archive.zip", "noext"])
def test_rejects_other_types(name):
    with pytest.raises(ValidationError):
        validate_document(SimpleUploadedFile(name, b"data"))


def test_rejects_oversized_file(settings):
    settings.ERP_OD_MAX_UPLOAD_BYTES = 10
    with pytest.raises(ValidationError, match="File too large"):
        validate_document(SimpleUploadedFile("big.pdf", b"x" * 11, content_type="application/pdf"))


def test_document_path_is_per_student():
    class Row:
        student_id = 42

    path = document_path(Row(), "Medical Certificate.PDF")
    assert path.startswith("od_documents/42/")
    assert path.endswith(".pdf")
