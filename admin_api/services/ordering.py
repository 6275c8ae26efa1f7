# admin_api/services/ordering.py
import uuid

from fastapi import HTTPException, status


def apply_order(rows: list, ordered_ids: list[uuid.UUID]) -> list:
    """
    Give each row the display_order of its id's position in `ordered_ids`.

    Raises:
        HTTPException(400): unless `ordered_ids` lists every row exactly once.
    """
    by_id = {row.id: row for row in rows}
    if set(ordered_ids) != set(by_id) or len(ordered_ids) != len(by_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Reorder must list every existing id exactly once",
        )
    for position, row_id in enumerate(ordered_ids):
        by_id[row_id].display_order = position
    return [by_id[row_id] for row_id in ordered_ids]
