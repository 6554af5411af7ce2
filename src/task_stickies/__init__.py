"""
Shared file-backed task tree store.

Layout under the storage root:
- projects.json: project registry
- <project>/notes.json: task forest (whole-document atomic replace)
- <project>/raw.txt: append-only raw task log
"""
