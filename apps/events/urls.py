from django.urls import path

from apps.events.views import ActiveEventListAPIView
from apps.events.views import BatchCreateAPIView
from apps.events.views import BatchDeleteAPIView
from apps.events.views import BatchListAPIView
from apps.events.views import BatchUpdateAPIView
from apps.events.views import EventCreateAPIView
from apps.events.views import EventDeleteAPIView
from apps.events.views import EventDetailAPIView
from apps.events.views import EventListAPIView
from apps.events.views import EventUpdateAPIView

app_name = 'events'


urlpatterns = [
    # Event CRUD operations
    path('', EventListAPIView.as_view(), name='event-list'),  # GET /events/
    path('active/', ActiveEventListAPIView.as_view(), name='event-active'),  # GET /events/active/
    path('create/', EventCreateAPIView.as_view(), name='event-create'),  # POST /events/create/
    path('<int:event_id>/', EventDetailAPIView.as_view(), name='event-detail'),  # GET /events/{id}/
    path('<int:event_id>/update/', EventUpdateAPIView.as_view(), name='event-update'),  # PUT /events/{id}/update/
    path('<int:event_id>/delete/', EventDeleteAPIView.as_view(), name='event-delete'),  # DELETE /events/{id}/delete/
    # Batches
    path('<int:event_id>/batches/', BatchListAPIView.as_view(), name='batch-list'),  # GET
    path('<int:event_id>/batches/create/', BatchCreateAPIView.as_view(), name='batch-create'),  # POST
    path('batches/<int:batch_id>/update/', BatchUpdateAPIView.as_view(), name='batch-update'),  # PUT
    path('batches/<int:batch_id>/delete/', BatchDeleteAPIView.as_view(), name='batch-delete'),  # DELETE
]
