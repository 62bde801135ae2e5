from typing import Any, Dict, List, Optional

from database.models import Notification, utcnow
from database.repositories.base import BaseRepository


class NotificationRepository(BaseRepository):
    collection = 'notifications'

    def create(self, data: Dict[str, Any]) -> Notification:
        payload = {'read': False, 'created_at': utcnow(), **data}
        notification_id = self.store.create(self.collection, payload)
        return self.store.get(self.collection, notification_id)

    def get(self, notification_id: Any) -> Optional[Notification]:
        return self.store.get(self.collection, notification_id)

    def get_for_user(self, user_id: str, notification_type: Optional[str] = None) -> List[Notification]:
        filters = [('user_id', '==', user_id)]
        if notification_type:
            filters.append(('type', '==', notification_type))
        return self.store.query(self.collection, filters, order_by='-created_at')

    def get_unread(self, user_id: str) -> List[Notification]:
        return self.store.query(self.collection, [
            ('user_id', '==', user_id),
            ('read', '==', False),
        ])

    def delete(self, notification_id: Any) -> None:
        self.store.delete(self.collection, notification_id)
