"""Backlog API endpoint paths, relative to `/api/v2/`.

Paths containing placeholders are filled in with `str.format`.
"""

# --- Space ---
SPACE = "space"
SPACE_ACTIVITIES = "space/activities"
SPACE_IMAGE = "space/image"
SPACE_NOTIFICATION = "space/notification"

# --- Issues ---
ISSUES = "issues"
ISSUE = "issues/{issue_id_or_key}"
ISSUES_COUNT = "issues/count"

# --- Documents ---
DOCUMENTS = "documents"
DOCUMENT = "documents/{document_id}"
DOCUMENT_TREE = "documents/tree"
DOCUMENT_ATTACHMENT = "documents/{document_id}/attachments/{attachment_id}"

# --- Projects ---
PROJECTS = "projects"
PROJECT = "projects/{project_id_or_key}"

# --- Users ---
USERS = "users"
USER = "users/{user_id}"
MYSELF = "users/myself"
USER_ICON = "users/{user_id}/icon"
USER_ACTIVITIES = "users/{user_id}/activities"
USER_STARS = "users/{user_id}/stars"
USER_STARS_COUNT = "users/{user_id}/stars/count"
RECENTLY_VIEWED_ISSUES = "users/myself/recentlyViewedIssues"
RECENTLY_VIEWED_PROJECTS = "users/myself/recentlyViewedProjects"
RECENTLY_VIEWED_WIKIS = "users/myself/recentlyViewedWikis"
