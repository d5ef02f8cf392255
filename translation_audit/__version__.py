"""Version information for translation-audit."""

__version__ = "1.2.1"
__author__ = "Sezgin Paksoy"
__description__ = "Localization audit tool: find missing and stale translations using git history"

# Changelog:
# 1.2.1 - Fixes
#        - Literal dotted keys ("a.b") keep their shape on ingest
#        - generate fails when git is missing or the root is not a repository
#        - Patched documents keep their file permissions
#        - Backups hold exactly the documents being patched
#        - --no-color also applies to console reports
#
# 1.2.0 - Ingest hardening
#        - Atomic writes (temp file + rename) for patched documents
#        - Backup of the locale directory before ingest (--no-backup to skip)
#        - Unknown namespaces abort the ingest before any file is written
#        - Conflicting paths (e.g. "a.b" when "a" is a string) fail only
#          the affected namespace
#
# 1.1.0 - Concurrent history lookups
#        - Commit resolution runs on a bounded thread pool
#        - tqdm progress bar while resolving history
#        - JSON audit report (generate --json)
#
# 1.0.0 - Initial release
#        - generate: CSV translation templates per locale
#        - ingest: apply filled-out templates to locale documents
#        - JSONC documents (comments and trailing commas tolerated)
