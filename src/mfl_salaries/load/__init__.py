"""
Load Layer - Report Output

This layer renders the ranked report into an Excel workbook.
- Presentation only, no business logic
"""
