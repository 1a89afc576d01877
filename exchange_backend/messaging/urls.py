# messaging/urls.py

from django.urls import path

from messaging.views import MarkReadView, MessageListView, SendMessageView

urlpatterns = [
    path("", MessageListView.as_view(), name="messages"),
    path("send/", SendMessageView.as_view(), name="messages-send"),
    path("mark-read/", MarkReadView.as_view(), name="messages-mark-read"),
]
