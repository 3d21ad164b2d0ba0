from .completed_part import CompletedPart
from .part_task import PartTask
from .upload_session import UploadSession, count_parts

__all__ = ["CompletedPart", "PartTask", "UploadSession", "count_parts"]
