from sowgen.plugins.renderers import docx_renderer, markdown_renderer  # noqa: F401
