# forum/services/exceptions.py


class ForumError(Exception):
    pass


class DiscussionNotFoundError(ForumError):
    pass


class DiscussionLockedError(ForumError):
    """Locked discussions accept no new replies."""


class ForumPermissionError(ForumError):
    pass
