APP_ORG = "QuickTools"
APP_NAME = "PyMarkdownExport"

# Exported files are always offered as document.<ext>; callers may rename.
DEFAULT_BASENAME = "document"

DEFAULT_DOCUMENT_TITLE = "Untitled Document"
DEFAULT_SLIDE_TITLE = "Document"
DEFAULT_PRESENTATION_TITLE = "Markdown Presentation"
DEFAULT_PRESENTATION_AUTHOR = "Markdown Converter"

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>{title}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  {style}
</head>
<body class="preview-content">
  {body}
</body>
</html>"""
