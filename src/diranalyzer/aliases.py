from diranalyzer.core.models import ExportFormat

EXPORT_FORMAT_ALIASES = {
    "json": ExportFormat.JSON,
    "csv": ExportFormat.CSV,
}

EXPORT_FORMAT_CHOICES = list(EXPORT_FORMAT_ALIASES.keys())

EXPORT_HELP_TEXT = (
    "Export results to a file:\n"
    "  json : Full report as pretty-printed JSON\n"
    "  csv  : Largest files, largest directories and duplicate members as CSV rows\n"
)

EXCLUDE_HELP_TEXT = (
    "Exclude entries whose full path matches this regular expression.\n"
    "Repeat the flag for several patterns. A matching directory is skipped\n"
    "together with everything below it.\n"
    "Example    : %(prog)s ~/projects --exclude node_modules --exclude '\\.log$'\n"
)

EPILOG_TEXT = """
Examples:
  Basic usage - size breakdown and type distribution of a folder
  %(prog)s ~/Downloads

  Also find duplicate files of at least 1MB using 8 threads
  %(prog)s ~/Downloads --duplicates --min-size 1MB -t 8

  Scan deeper, include hidden files and export the report as JSON
  %(prog)s ~/projects -d 20 -a -e json -o report.json

  Move all but one file of every duplicate group to trash (with confirmation prompt)
  %(prog)s ~/Photos --duplicates --keep-one

  Same as above but without confirmation (for scripts)
  %(prog)s ~/Photos --duplicates --keep-one --force
"""
