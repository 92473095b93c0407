"""Task Trackerのドメイン例外定義

ストア層・サービス層が送出し、HTTP層がステータスコードへ変換する。
"""


class TaskTrackerError(Exception):
    """Task Tracker基底例外"""

    pass


class ConflictError(TaskTrackerError):
    """一意制約に違反した（ユーザー名の重複など）"""

    pass


class InternalError(TaskTrackerError):
    """想定外の永続化エラー"""

    pass


class NotFoundError(TaskTrackerError):
    """所有者スコープ内に対象が存在しない"""

    pass


class AuthenticationError(TaskTrackerError):
    """認証情報またはアクセストークンが不正"""

    pass
