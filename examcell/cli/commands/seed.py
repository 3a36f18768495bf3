"""Load subject and staff master data into the local mirror tables."""

import asyncio
from pathlib import Path

import cyclopts
import yaml
from pydantic import BaseModel

from examcell.cli.console import get_console
from examcell.config import Config, configure_logging
from examcell.domain.auth.model.value import StaffId, StaffMember
from examcell.domain.subject.model.value import Subject, SubjectId
from examcell.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from examcell.infrastructure.persistence.repository.directory import (
    SQLAlchemyStaffDirectory,
    SQLAlchemySubjectReader,
)

app = cyclopts.App(name="seed", help="Master data import")


class SeedFile(BaseModel):
    """Shape of a seed YAML file.

    subjects:
      - {code: CS301, name: Operating Systems, department: CSE, semester: 5}
    staff:
      - {external_id: user_2f8x, name: A. Kumar, role: Staff, department: CSE}
    """

    subjects: list[dict] = []
    staff: list[dict] = []


async def _load(config: Config, data: SeedFile) -> tuple[int, int]:
    engine = create_db_engine(config)
    session_factory = create_session_factory(engine)
    try:
        async with session_factory() as session:
            subjects = SQLAlchemySubjectReader(session)
            directory = SQLAlchemyStaffDirectory(session)
            for raw in data.subjects:
                await subjects.add(Subject(id=SubjectId.generate(), **raw))
            for raw in data.staff:
                await directory.add(StaffMember(id=StaffId.generate(), **raw))
            await session.commit()
    finally:
        await engine.dispose()
    return len(data.subjects), len(data.staff)


@app.default
def load(path: Path) -> None:
    """Import subjects and staff from a YAML file.

    Args:
        path: Seed file with `subjects` and `staff` lists.
    """
    console = get_console()
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)

    if not path.exists():
        console.error(f"Seed file not found: {path}")
        raise SystemExit(1)

    data = SeedFile.model_validate(yaml.safe_load(path.read_text()) or {})
    n_subjects, n_staff = asyncio.run(_load(config, data))
    console.success(f"Imported {n_subjects} subject(s) and {n_staff} staff record(s)")
