"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-03-02
@Docs: Helper utilities.
辅助工具。
"""

from form_rules.helpers.rows import as_record, iter_rows, rows_to_dicts

__all__ = ["as_record", "iter_rows", "rows_to_dicts"]
