"""
Paginated listing of merged records.

Pages are cut from a full scan of the merged records table on every call.
There is no sort key: items appear in scan order, which is not stable
across calls when the table changes, so consecutive pages can overlap or
skip records.
"""

from merge_api.data_access.merged_records_repository import MergedRecordsRepository
from merge_api.models.page_result import PageResult
from merge_api.utils.structured_logger import get_structured_logger
from merge_api.utils.validators import validate_pagination

logger = get_structured_logger('HistoryService')


class HistoryService:
    """
    Computes pages of the merged record history.
    """

    def __init__(self, merged_records_repository: MergedRecordsRepository):
        """
        Initialize history service.

        Args:
            merged_records_repository: Source of merged records
        """
        self.merged_records_repository = merged_records_repository

    def list_page(self, page: int, limit: int) -> PageResult:
        """
        Compute one page of merged records.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            PageResult; pages past the end have no items

        Raises:
            ValidationError: If page or limit is not an integer >= 1
            BulkSourceUnavailableError: If the merged records cannot be read
        """
        validate_pagination(page, limit)

        records = self.merged_records_repository.scan_all()
        total = len(records)

        start_index = (page - 1) * limit
        end_index = start_index + limit
        items = [record.to_dict() for record in records[start_index:end_index]]

        logger.info(
            f'Computed history page {page}',
            operation='list_page',
            page=page,
            limit=limit,
            total=total,
            returned=len(items)
        )

        return PageResult.build(items=items, page=page, limit=limit, total=total)
