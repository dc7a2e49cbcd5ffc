"""
This file contains the LLM prompts used by the DayLog remote formatter.
"""

# --- Daily Table Prompt ---

DAILY_TABLE_PROMPT = """
You are a helpful assistant that restructures daily activity logs.
Convert the following freeform day log into a concise Markdown table.
Columns: Time, Activity, Notes.
Follow rules:
- Normalize times (e.g., 7:30 -> 7:30 AM).
- For ranges, infer start–end when possible.
- Keep notes short and remove exclamations/emojis unless meaningful.
- Output ONLY a Markdown table, no extra text before/after.

{log_text}
"""
