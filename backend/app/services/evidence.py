"""Evidence store

Files attached to a case (photos, certificates, plans). Bytes go to a flat
directory; metadata goes to the evidence table. A file that was written but
whose row could not be saved is removed again.
"""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.case import EvidenceType
from app.models.db.account import UserORM
from app.models.db.case import CaseORM
from app.models.db.evidence import EvidenceORM
from app.services.accounts import AccessDeniedError
from app.services.sanitize import sanitize_string, split_safe_filename

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/webp",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})


class EvidenceNotFoundError(Exception):
    def __init__(self, evidence_id: str) -> None:
        self.evidence_id = evidence_id
        super().__init__(f"Evidence not found: {evidence_id}")


class EvidenceRejectedError(Exception):
    """Upload refused (type, size, name)"""


class EvidenceStore:
    """Evidence files under one directory + their DB rows"""

    def __init__(self, root: str | Path, max_bytes: int) -> None:
        self.root = Path(root).resolve()
        self.max_bytes = max_bytes

    def path_for(self, filename: str) -> Path:
        """Absolute path of a stored file, refusing anything outside root"""
        path = (self.root / filename).resolve()
        if path.parent != self.root:
            raise EvidenceRejectedError("Invalid file path")
        return path

    def _stored_name(self, original_filename: str) -> str:
        base, ext = split_safe_filename(original_filename)
        stamp = int(time.time() * 1000)
        name = f"{stamp}-{base}{ext}"
        while (self.root / name).exists():
            stamp += 1
            name = f"{stamp}-{base}{ext}"
        return name

    def validate(self, original_filename: str, mime_type: str, size: int) -> None:
        if not original_filename:
            raise EvidenceRejectedError("File name is required")
        if mime_type not in ALLOWED_MIME_TYPES:
            raise EvidenceRejectedError(f"Invalid file type: {mime_type}")
        if size > self.max_bytes:
            raise EvidenceRejectedError(
                f"File too large (max {self.max_bytes // (1024 * 1024)}MB)"
            )

    def save(
        self,
        db: Session,
        case: CaseORM,
        user: UserORM,
        *,
        original_filename: str,
        mime_type: str,
        content: bytes,
        description: str | None = None,
        evidence_type: EvidenceType | None = None,
    ) -> EvidenceORM:
        """Validate, write the file, record the row

        Raises:
            EvidenceRejectedError: type / size / name not acceptable
        """
        self.validate(original_filename, mime_type, len(content))

        self.root.mkdir(parents=True, exist_ok=True)
        filename = self._stored_name(original_filename)
        path = self.path_for(filename)
        path.write_bytes(content)

        if evidence_type is None:
            evidence_type = EvidenceType.PHOTO if mime_type.startswith("image/") else EvidenceType.DOCUMENT

        evidence_id = str(uuid.uuid4())
        try:
            evidence = EvidenceORM(
                id=evidence_id,
                case_id=case.id,
                type=EvidenceType(evidence_type).value,
                filename=filename,
                original_filename=sanitize_string(original_filename, 255) or filename,
                mime_type=mime_type,
                size=len(content),
                url=f"/api/evidence/{evidence_id}/file",
                uploaded_by=user.id,
                description=sanitize_string(description, 500) or None,
            )
            db.add(evidence)
            db.commit()
        except Exception:
            db.rollback()
            try:
                path.unlink()
            except OSError as e:
                logger.error("Could not remove orphan evidence file %s: %s", path, e)
            raise

        db.refresh(evidence)
        logger.info("Evidence stored: %s (%s, %d bytes) case=%s", filename, mime_type, len(content), case.id)
        return evidence

    def get(self, db: Session, evidence_id: str) -> EvidenceORM:
        evidence = db.get(EvidenceORM, evidence_id)
        if evidence is None:
            raise EvidenceNotFoundError(evidence_id)
        return evidence

    def list_for_case(self, db: Session, case_id: str) -> list[EvidenceORM]:
        return list(
            db.scalars(
                select(EvidenceORM)
                .where(EvidenceORM.case_id == case_id)
                .order_by(EvidenceORM.uploaded_at)
            )
        )

    def delete(self, db: Session, evidence: EvidenceORM, user: UserORM) -> None:
        """Remove row and file; uploader or case owner only"""
        case = evidence.case
        if evidence.uploaded_by != user.id and (case is None or case.user_id != user.id):
            raise AccessDeniedError("Only the uploader or the case owner can delete evidence")

        filename = evidence.filename
        path = self.path_for(filename)
        db.delete(evidence)
        db.commit()
        if path.exists():
            path.unlink()
        logger.info("Evidence deleted: %s", filename)
