class StoryDecodeError(Exception):
    """
    Exception raised when a story file is not a well-formed set of chapters.
    """
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Could not decode story: {self.reason}")

class ChapterNotFoundException(Exception):
    """
    Exception raised when no chapter exists for a given key.
    """
    def __init__(self, chapter_key: str):
        self.chapter_key = chapter_key
        super().__init__(f"Chapter with key '{self.chapter_key}' not found.")
