from typing import Any, Optional

from pydantic import BaseModel

from app.utils.enums import JobStatus


class JobStatusInfo(BaseModel):
    """Состояние задачи общей очереди."""

    job_id: str
    status: JobStatus
    result: Optional[Any] = None
