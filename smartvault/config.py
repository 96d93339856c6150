"""
Configuration constants for the SmartVault application.
"""

import os

# Application Metadata
APP_VERSION = "1.0"  # Use: Current version of the application. Type: str. Range: Semantic versioning string (e.g., "1.0.0")
APP_NAME = "SmartVault Password Manager"  # Use: Full name of the application. Type: str. Range: Any valid string.
APP_TAGLINE = "A safe and smart password vault."  # Use: Subtitle shown under the main window header. Type: str. Range: Any valid string.
APP_TITLE_PREFIX = f"{APP_NAME} v{APP_VERSION}"  # Use: Prefix for the application window titles, combining name and version. Type: str (f-string). Range: Derived from APP_NAME and APP_VERSION.
APP_STYLE = 'Fusion'  # Use: PyQt5 application style. Type: str. Range: Valid PyQt5 style names (e.g., 'Fusion', 'Windows', 'Macintosh').

# Logging
LOG_LEVEL = os.environ.get("SMARTVAULT_LOG_LEVEL", "INFO").upper()  # Use: Root logging level configured by main(). Type: str. Range: DEBUG, INFO, WARNING, ERROR, CRITICAL.
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'  # Use: Format string passed to logging.basicConfig. Type: str. Range: Any valid logging format.

# Action Gate
UNLOCK_PIN = os.environ.get("SMARTVAULT_UNLOCK_PIN", "1234")  # Use: Fixed secret that unlocks gated actions. Demo only, not a credential. Type: str. Range: 4-digit numeric string.
PIN_ERROR_MESSAGE = "Please enter the correct pin number."  # Use: Inline error shown after a wrong PIN. Type: str. Range: Any descriptive string.
PIN_PLACEHOLDER = "Enter Pin Number"  # Use: Placeholder text for the PIN input. Type: str. Range: Any descriptive string.
GATE_TITLE_EDIT = "Unlock to Edit"  # Use: PIN dialog title for the edit action. Type: str. Range: Any descriptive string.
GATE_TITLE_DELETE = "Unlock to Delete"  # Use: PIN dialog title for the delete action. Type: str. Range: Any descriptive string.
GATE_TITLE_VIEW_DETAILS = "Unlock to View Details"  # Use: PIN dialog title for the details view. Type: str. Range: Any descriptive string.
GATE_TITLE_VIEW_HISTORY = "Unlock to View History"  # Use: PIN dialog title for the history view. Type: str. Range: Any descriptive string.

# AI Adapter (Gemini generateContent)
GEMINI_API_KEY = os.environ.get("SMARTVAULT_GEMINI_API_KEY", "")  # Use: API key appended as ?key= to Gemini requests. Type: str. Range: Any string; requests fail upstream when empty.
GEMINI_MODEL = os.environ.get("SMARTVAULT_GEMINI_MODEL", "gemini-2.5-flash-preview-05-20")  # Use: Gemini model name. Type: str. Range: Any model id served by generateContent.
GEMINI_API_URL = f"https://generativelanguage.googleapis.com/v1beta/models/{GEMINI_MODEL}:generateContent"  # Use: Endpoint for AI requests. Type: str (f-string). Range: Derived from GEMINI_MODEL.
AI_REQUEST_TIMEOUT_SECONDS = float(os.environ.get("SMARTVAULT_AI_TIMEOUT", "30"))  # Use: Socket timeout for a single AI request. Type: float. Range: Positive number of seconds.
AI_SCORE_MIN = 1  # Use: Lowest password strength score accepted from the adapter. Type: int. Range: 1.
AI_SCORE_MAX = 100  # Use: Highest password strength score accepted from the adapter. Type: int. Range: 100.

# Status Messages
MSG_SEARCH_EMPTY = "Please enter a search term for smart search."  # Use: Status when smart search is started without a term. Type: str. Range: Any descriptive string.
MSG_SEARCH_PROGRESS = "AI smart search in progress..."  # Use: Status while the query expansion call runs. Type: str. Range: Any descriptive string.
MSG_SEARCH_FOUND = "AI found the following sites: {sites}. Search results have been updated."  # Use: Status after a successful expansion. Type: str (format). Range: Must contain {sites}.
MSG_SEARCH_NONE = "AI smart search did not find any related site names."  # Use: Status when expansion fails or returns nothing. Type: str. Range: Any descriptive string.
MSG_ANALYZE_PROGRESS = "Analyzing password strength..."  # Use: Status while the password analysis call runs. Type: str. Range: Any descriptive string.
MSG_ANALYZE_RESULT = "Password Strength: {score}/100. Suggestions: {suggestions}"  # Use: Status after a successful analysis. Type: str (format). Range: Must contain {score} and {suggestions}.
MSG_ANALYZE_FAILED = "Could not analyze password strength."  # Use: Status when analysis fails. Type: str. Range: Any descriptive string.
MSG_NO_RECORDS = "No passwords found."  # Use: Placeholder when the filtered list is empty. Type: str. Range: Any descriptive string.
MSG_NO_HISTORY = "No changes have been recorded yet."  # Use: Placeholder in the history view when only the seed entry exists. Type: str. Range: Any descriptive string.

# Data
LOAD_SAMPLE_DATA = os.environ.get("SMARTVAULT_LOAD_SAMPLES", "true").lower() == "true"  # Use: Start the desktop app with the demo records. Type: bool. Range: True or False.
SNAPSHOT_VERSION = 1  # Use: Format version written into exported snapshots. Type: int. Range: Positive integer.
SNAPSHOT_FILE_FILTER = "SmartVault Snapshot (*.json)"  # Use: File dialog filter for export/import. Type: str. Range: Qt file filter string.
DEFAULT_SNAPSHOT_FILE = "smartvault.json"  # Use: Suggested filename for exports. Type: str. Range: Any valid filename.

# UI Settings
TABLE_PASSWORD_HIDDEN_TEXT = "••••••••"  # Use: Placeholder text displayed in dialogs for hidden passwords. Type: str. Range: Any string.
MEMO_PREVIEW_LENGTH = 50  # Use: Characters of memo shown in the record table before truncation. Type: int. Range: Positive integer.
STATUS_FLASH_MS = 2000  # Use: Duration of transient status bar messages in milliseconds. Type: int. Range: Positive integer.
