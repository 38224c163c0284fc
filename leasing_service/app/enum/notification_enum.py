from enum import Enum


class NotificationType(str, Enum):
    NEW_SPACE = "NEW_SPACE"
    SPACE_STATUS_CHANGE = "SPACE_STATUS_CHANGE"
    NEW_CONTRACT = "NEW_CONTRACT"
    CONTRACT_UPDATE = "CONTRACT_UPDATE"


class NotificationTopic:
    SPACES = "/topic/spaces"
    CONTRACTS = "/topic/contracts"
    USER_QUEUE = "/queue/user.{user_id}"

    @staticmethod
    def user_queue(user_id) -> str:
        return NotificationTopic.USER_QUEUE.format(user_id=user_id)
