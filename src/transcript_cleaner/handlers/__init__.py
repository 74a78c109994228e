from transcript_cleaner.handlers.session_text_handler import SessionTextHandler

__all__ = ["SessionTextHandler"]
