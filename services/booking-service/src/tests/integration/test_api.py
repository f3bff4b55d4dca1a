# services/booking-service/src/tests/integration/test_api.py
"""
Integration Tests for Booking API

Tests API endpoints with full request/response cycle.
"""

import uuid
from datetime import timedelta

import pytest
from rest_framework import status
from rest_framework.test import APIClient

from apps.core.models import Booking, OpeningHours, ServiceOffering, Slot
from shared.common.authentication import JWTTokenGenerator


def booking_payload(offering, start, **extra):
    return {
        'service_offering_id': str(offering.id),
        'start_datetime': start.isoformat(),
        **extra,
    }


GUEST = {
    'guest_name': 'Grace Guest',
    'guest_email': 'grace@example.com',
    'guest_phone': '+1 555 765 4321',
}


@pytest.mark.django_db
class TestAvailabilityAPI:
    """Integration tests for the availability endpoint."""

    def setup_method(self):
        self.client = APIClient()

    def test_available_slots(self, business, offering, open_all_week, future_day):
        response = self.client.get('/api/v1/availability/', {
            'business': str(business.id),
            'offering': str(offering.id),
            'start_date': future_day.isoformat(),
            'days': 2,
        })

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 2
        first = response.data[0]
        assert first['date'] == future_day.isoformat()
        assert first['business_id'] == str(business.id)
        assert first['service_offering_id'] == str(offering.id)
        assert first['slots'][0] == {'start_time': '09:00', 'end_time': '10:00'}
        assert len(first['slots']) == 8

    def test_existing_booking_excluded(self, business, offering, open_all_week, future_day, create_booking):
        create_booking(start='10:00')

        response = self.client.get('/api/v1/availability/', {
            'business': str(business.id),
            'offering': str(offering.id),
            'start_date': future_day.isoformat(),
            'days': 1,
        })

        starts = [slot['start_time'] for slot in response.data[0]['slots']]
        assert starts == ['09:00', '11:00', '12:00', '13:00', '14:00', '15:00', '16:00']

    def test_defaults_to_a_week_from_tomorrow(self, business, offering, open_all_week):
        response = self.client.get('/api/v1/availability/', {
            'business': str(business.id),
            'offering': str(offering.id),
        })

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 7

    def test_missing_parameters(self, db):
        response = self.client.get('/api/v1/availability/')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert 'business' in response.data['error']['details']

    def test_unknown_offering(self, business, future_day):
        response = self.client.get('/api/v1/availability/', {
            'business': str(business.id),
            'offering': str(uuid.uuid4()),
        })

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['code'] == 'SERVICE_NOT_FOUND'

    def test_too_many_days(self, business, offering):
        response = self.client.get('/api/v1/availability/', {
            'business': str(business.id),
            'offering': str(offering.id),
            'days': 1000,
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestBookingAPI:
    """Integration tests for booking endpoints."""

    def setup_method(self):
        self.client = APIClient()

    def test_guest_booking(self, offering, open_all_week, future_day, make_start):
        response = self.client.post(
            '/api/v1/bookings/',
            data=booking_payload(offering, make_start(future_day, '10:00'), **GUEST),
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'created'
        assert response.data['user_id'] is None
        assert response.data['guest_phone'] == '+15557654321'
        assert response.data['slot']['start_time'] == '10:00'
        assert response.data['service_offering']['id'] == str(offering.id)

    def test_guest_booking_without_email(self, offering, open_all_week, future_day, make_start):
        guest = {k: v for k, v in GUEST.items() if k != 'guest_email'}

        response = self.client.post(
            '/api/v1/bookings/',
            data=booking_payload(offering, make_start(future_day, '10:00'), **guest),
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'VALIDATION_ERROR'
        assert response.data['error']['details']['missing_fields'] == ['guest_email']
        assert not Booking.objects.exists()
        assert not Slot.objects.exists()

    def test_authenticated_booking(self, offering, open_all_week, future_day, make_start, customer_user):
        self.client.force_authenticate(user=customer_user)

        response = self.client.post(
            '/api/v1/bookings/',
            data=booking_payload(offering, make_start(future_day, '11:00')),
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user_id'] == customer_user.id

    def test_booking_with_bearer_token(self, offering, open_all_week, future_day, make_start, user_id):
        token = JWTTokenGenerator.generate_access_token(user_id, roles=['user'])
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

        response = self.client.post(
            '/api/v1/bookings/',
            data=booking_payload(offering, make_start(future_day, '11:00')),
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user_id'] == str(user_id)

    def test_invalid_token_rejected(self, offering, open_all_week, future_day, make_start):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')

        response = self.client.post(
            '/api/v1/bookings/',
            data=booking_payload(offering, make_start(future_day, '11:00'), **GUEST),
            format='json'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_full_window_conflicts(self, offering, open_all_week, future_day, make_start, create_booking):
        create_booking(start='10:00')

        response = self.client.post(
            '/api/v1/bookings/',
            data=booking_payload(offering, make_start(future_day, '10:00'), **GUEST),
            format='json'
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error']['code'] == 'SLOT_UNAVAILABLE'

    def test_past_start_rejected(self, offering, open_all_week, future_day, make_start):
        past = make_start(future_day, '10:00') - timedelta(days=30)

        response = self.client.post(
            '/api/v1/bookings/',
            data=booking_payload(offering, past, **GUEST),
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_special_requests_length_limit(self, offering, open_all_week, future_day, make_start):
        response = self.client.post(
            '/api/v1/bookings/',
            data=booking_payload(offering, make_start(future_day, '10:00'), special_requests='x' * 501, **GUEST),
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'special_requests' in response.data['error']['details']

    def test_retrieve_own_booking(self, open_all_week, create_booking, customer_user):
        booking = create_booking(user_id=customer_user.id)
        self.client.force_authenticate(user=customer_user)

        response = self.client.get(f'/api/v1/bookings/{booking.id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(booking.id)

    def test_retrieve_requires_authentication(self, open_all_week, create_booking):
        booking = create_booking()

        response = self.client.get(f'/api/v1/bookings/{booking.id}/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_stranger_is_forbidden(self, open_all_week, create_booking, customer_user, other_user):
        booking = create_booking(user_id=customer_user.id)
        self.client.force_authenticate(user=other_user)

        response = self.client.get(f'/api/v1/bookings/{booking.id}/')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'UNAUTHORIZED'

    def test_unknown_booking(self, db, customer_user):
        self.client.force_authenticate(user=customer_user)

        response = self.client.get(f'/api/v1/bookings/{uuid.uuid4()}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['code'] == 'BOOKING_NOT_FOUND'

    def test_patch_status(self, open_all_week, create_booking, customer_user):
        booking = create_booking(user_id=customer_user.id)
        self.client.force_authenticate(user=customer_user)

        response = self.client.patch(
            f'/api/v1/bookings/{booking.id}/',
            data={'status': 'pending', 'special_requests': 'Extra towel'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'pending'
        assert response.data['special_requests'] == 'Extra towel'

    def test_patch_invalid_transition(self, open_all_week, create_booking, customer_user):
        booking = create_booking(user_id=customer_user.id)
        self.client.force_authenticate(user=customer_user)

        response = self.client.patch(
            f'/api/v1/bookings/{booking.id}/',
            data={'status': 'completed'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'INVALID_STATUS_TRANSITION'

    def test_patch_requires_a_field(self, open_all_week, create_booking, customer_user):
        booking = create_booking(user_id=customer_user.id)
        self.client.force_authenticate(user=customer_user)

        response = self.client.patch(f'/api/v1/bookings/{booking.id}/', data={}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_owner_confirms(self, open_all_week, create_booking, owner_user):
        booking = create_booking(status=Booking.Status.PENDING)
        self.client.force_authenticate(user=owner_user)

        response = self.client.post(f'/api/v1/bookings/{booking.id}/confirm/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'confirmed'

    def test_customer_cannot_confirm(self, open_all_week, create_booking, customer_user):
        booking = create_booking(user_id=customer_user.id, status=Booking.Status.PENDING)
        self.client.force_authenticate(user=customer_user)

        response = self.client.post(f'/api/v1/bookings/{booking.id}/confirm/')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_delete_cancels(self, open_all_week, create_booking, customer_user):
        booking = create_booking(user_id=customer_user.id)
        self.client.force_authenticate(user=customer_user)

        response = self.client.delete(f'/api/v1/bookings/{booking.id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'cancelled'
        assert Booking.objects.filter(pk=booking.pk).exists()
        assert Slot.objects.get(pk=booking.slot_id).bookings_count == 0

    def test_my_bookings(self, open_all_week, future_day, create_booking, customer_user, other_user):
        create_booking(start='09:00', user_id=customer_user.id)
        create_booking(start='10:00', user_id=customer_user.id, status=Booking.Status.CANCELLED)
        create_booking(start='11:00', user_id=other_user.id)
        self.client.force_authenticate(user=customer_user)

        response = self.client.get('/api/v1/bookings/my/')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

        response = self.client.get('/api/v1/bookings/my/', {'status': 'cancelled'})
        assert response.data['count'] == 1

        response = self.client.get('/api/v1/bookings/my/', {'limit': 1, 'page': 2})
        assert len(response.data['results']) == 1

        response = self.client.get('/api/v1/bookings/my/', {
            'from_date': (future_day + timedelta(days=1)).isoformat(),
        })
        assert response.data['count'] == 0

    def test_my_bookings_rejects_inverted_range(self, db, future_day, customer_user):
        self.client.force_authenticate(user=customer_user)

        response = self.client.get('/api/v1/bookings/my/', {
            'from_date': future_day.isoformat(),
            'to_date': (future_day - timedelta(days=1)).isoformat(),
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestBusinessAPI:
    """Integration tests for business-scoped endpoints."""

    def setup_method(self):
        self.client = APIClient()

    def test_owner_lists_business_bookings(self, business, open_all_week, create_booking, owner_user):
        create_booking(start='09:00')
        create_booking(start='10:00', user_id=uuid.uuid4())
        self.client.force_authenticate(user=owner_user)

        response = self.client.get(f'/api/v1/businesses/{business.id}/bookings/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

    def test_business_bookings_filters(self, business, open_all_week, create_booking, owner_user):
        haircut_guest = create_booking(start='09:00')
        create_booking(start='10:00', user_id=uuid.uuid4(), status=Booking.Status.PENDING)
        create_booking(start='11:00', user_id=uuid.uuid4(), status=Booking.Status.CANCELLED)
        shave = ServiceOffering.objects.create(business=business, name='Shave', duration_minutes=30)
        shave_booking = create_booking(start='12:00', user_id=uuid.uuid4(), service_offering=shave)
        self.client.force_authenticate(user=owner_user)
        url = f'/api/v1/businesses/{business.id}/bookings/'

        response = self.client.get(url, {'status_in': 'created,pending'})
        assert response.data['count'] == 3

        response = self.client.get(url, {'is_guest': 'true'})
        assert [row['id'] for row in response.data['results']] == [str(haircut_guest.id)]

        response = self.client.get(url, {'service_offering': str(shave.id)})
        assert [row['id'] for row in response.data['results']] == [str(shave_booking.id)]

    def test_business_bookings_ordering(self, business, open_all_week, create_booking, owner_user):
        create_booking(start='11:00')
        create_booking(start='09:00')
        create_booking(start='10:00')
        self.client.force_authenticate(user=owner_user)
        url = f'/api/v1/businesses/{business.id}/bookings/'

        response = self.client.get(url, {'ordering': 'slot__start_time'})
        assert [row['slot']['start_time'] for row in response.data['results']] == ['09:00', '10:00', '11:00']

        response = self.client.get(url, {'ordering': '-slot__start_time'})
        assert [row['slot']['start_time'] for row in response.data['results']] == ['11:00', '10:00', '09:00']

    def test_non_owner_cannot_list_business_bookings(self, business, customer_user):
        self.client.force_authenticate(user=customer_user)

        response = self.client.get(f'/api/v1/businesses/{business.id}/bookings/')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_opening_hours_are_public(self, business, open_all_week):
        response = self.client.get(f'/api/v1/businesses/{business.id}/opening-hours/')

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 7
        assert response.data[0] == {
            'day_of_week': 0,
            'day_name': 'Sunday',
            'opens_at': '09:00',
            'closes_at': '17:00',
        }

    def test_owner_replaces_opening_hours(self, business, open_all_week, owner_user):
        self.client.force_authenticate(user=owner_user)

        response = self.client.put(
            f'/api/v1/businesses/{business.id}/opening-hours/',
            data={'hours': [{'day_of_week': 1, 'opens_at': '10:00', 'closes_at': '14:00'}]},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert OpeningHours.objects.filter(business=business).count() == 1

    def test_non_owner_cannot_replace_opening_hours(self, business, open_all_week, customer_user):
        self.client.force_authenticate(user=customer_user)

        response = self.client.put(
            f'/api/v1/businesses/{business.id}/opening-hours/',
            data={'hours': []},
            format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert OpeningHours.objects.filter(business=business).count() == 7

    def test_unknown_business_opening_hours(self, db):
        response = self.client.get(f'/api/v1/businesses/{uuid.uuid4()}/opening-hours/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_owner_blocks_and_unblocks_slot(self, business, offering, open_all_week, future_day, owner_user):
        self.client.force_authenticate(user=owner_user)
        payload = {
            'service_offering_id': str(offering.id),
            'date': future_day.isoformat(),
            'start_time': '13:00',
        }

        response = self.client.post('/api/v1/slots/block/', data=payload, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_blocked'] is True

        availability = self.client.get('/api/v1/availability/', {
            'business': str(business.id),
            'offering': str(offering.id),
            'start_date': future_day.isoformat(),
            'days': 1,
        })
        assert '13:00' not in [slot['start_time'] for slot in availability.data[0]['slots']]

        response = self.client.post('/api/v1/slots/unblock/', data=payload, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_blocked'] is False

    def test_customer_cannot_block_slot(self, offering, future_day, customer_user):
        self.client.force_authenticate(user=customer_user)

        response = self.client.post('/api/v1/slots/block/', data={
            'service_offering_id': str(offering.id),
            'date': future_day.isoformat(),
            'start_time': '13:00',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Slot.objects.exists()


@pytest.mark.django_db
class TestHealthEndpoints:
    """Health and readiness probes."""

    def test_health(self, client):
        response = client.get('/health/')

        assert response.status_code == 200
        assert response.json()['service'] == 'booking-service'

    def test_readiness(self, client):
        response = client.get('/health/ready/')

        assert response.status_code == 200
        assert response.json()['checks'] == {'database': 'connected', 'cache': 'connected'}

    def test_request_id_is_echoed(self, client):
        response = client.get('/health/', HTTP_X_REQUEST_ID='trace-123')

        assert response['X-Request-ID'] == 'trace-123'
