"""
Widget lookups by tag.

Modules:
  records        : Widget / Tag / Dongle / WidgetDetail / WidgetLookup records.
  query_builder  : Parameterized SQL construction (``(sql, params)`` tuples).
  row_mapper     : GROUP_CONCAT parsing, pagination coercion, row → record.
  widget_service : Public entry point; scoped connection per call.
"""
