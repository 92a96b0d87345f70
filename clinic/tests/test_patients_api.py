import pytest
from django.urls import reverse

from clinic.models import Appointment, AuditEvent, Patient, Record

pytestmark = pytest.mark.django_db

URL = '/api/patients'


def make_patient(i=1, **kwargs):
    data = {'name': f'Patient {i}', 'age': 30 + i, 'village': 'Nabha', 'created_at': '2024-11-01T00:00:00.000Z'}
    data.update(kwargs)
    return Patient.objects.create(**data)


def test_create_patient_trims_text_and_defaults_gender(client):
    r = client.post(URL, {'name': '  Simran Kaur ', 'age': 32, 'village': ' Bhadson  '}, format='json')
    assert r.status_code == 201
    assert r.data['name'] == 'Simran Kaur'
    assert r.data['village'] == 'Bhadson'
    assert r.data['age'] == 32
    assert r.data['gender'] == 'other'
    assert r.data['phone'] is None
    assert r.data['createdAt'].endswith('Z')
    assert AuditEvent.objects.filter(action='create', object_type='patient', object_id=r.data['id']).exists()


def test_create_patient_accepts_numeric_string_age(client):
    r = client.post(URL, {'name': 'Rajesh Singh', 'age': '45', 'village': 'Gobindpura'}, format='json')
    assert r.status_code == 201
    assert r.data['age'] == 45


@pytest.mark.parametrize('body,code', [
    ({'age': 30, 'village': 'Nabha'}, 'MISSING_REQUIRED_FIELD'),
    ({'name': '   ', 'age': 30, 'village': 'Nabha'}, 'MISSING_REQUIRED_FIELD'),
    ({'name': 'Gurpreet', 'age': 30}, 'MISSING_REQUIRED_FIELD'),
    ({'name': 'Gurpreet', 'age': 0, 'village': 'Kheri'}, 'INVALID_AGE'),
    ({'name': 'Gurpreet', 'age': -4, 'village': 'Kheri'}, 'INVALID_AGE'),
    ({'name': 'Gurpreet', 'age': 'old', 'village': 'Kheri'}, 'INVALID_AGE'),
    ({'name': 'Gurpreet', 'age': 2.5, 'village': 'Kheri'}, 'INVALID_AGE'),
    ({'name': 'Gurpreet', 'village': 'Kheri'}, 'INVALID_AGE'),
])
def test_create_patient_validation(client, body, code):
    r = client.post(URL, body, format='json')
    assert r.status_code == 400
    assert r.data['code'] == code
    assert r.data['error']
    assert Patient.objects.count() == 0


def test_non_object_body_is_rejected(client):
    r = client.post(URL, ['Simran'], format='json')
    assert r.status_code == 400
    assert r.data['code'] == 'INVALID_BODY'


def test_writes_require_authentication_and_leave_no_trace(anon_client):
    p = make_patient()
    r = anon_client.post(URL, {'name': 'Simran', 'age': 32, 'village': 'Bhadson'}, format='json')
    assert r.status_code == 401
    assert r.data['code'] == 'AUTHENTICATION_REQUIRED'
    r = anon_client.put(f'{URL}?id={p.id}', {'name': 'Changed'}, format='json')
    assert r.status_code == 401
    r = anon_client.delete(f'{URL}?id={p.id}')
    assert r.status_code == 401
    p.refresh_from_db()
    assert p.name == 'Patient 1'
    assert Patient.objects.count() == 1
    assert AuditEvent.objects.count() == 0


def test_reads_are_public(anon_client):
    p = make_patient()
    r = anon_client.get(f'{URL}?id={p.id}')
    assert r.status_code == 200
    assert r.data['name'] == 'Patient 1'


def test_get_missing_patient_is_404(anon_client):
    r = anon_client.get(f'{URL}?id=999')
    assert r.status_code == 404
    assert r.data == {'error': 'Patient not found', 'code': 'NOT_FOUND'}


def test_invalid_id_is_400(anon_client, client):
    r = anon_client.get(f'{URL}?id=abc')
    assert r.status_code == 400
    assert r.data['code'] == 'INVALID_ID'
    r = client.delete(URL)
    assert r.status_code == 400
    assert r.data['code'] == 'MISSING_REQUIRED_FIELD'


def test_list_pagination_is_capped(anon_client):
    for i in range(1, 13):
        make_patient(i)
    r = anon_client.get(URL)
    assert [p['name'] for p in r.data] == [f'Patient {i}' for i in range(1, 11)]
    r = anon_client.get(URL, {'page': 2, 'limit': 5})
    assert [p['name'] for p in r.data] == [f'Patient {i}' for i in range(6, 11)]
    r = anon_client.get(URL, {'page': 0, 'limit': 500})
    assert len(r.data) == 12
    assert r.data[0]['name'] == 'Patient 1'
    r = anon_client.get(URL, {'limit': 'lots', 'page': 'first'})
    assert len(r.data) == 10


def test_list_search_matches_name_village_or_phone(anon_client):
    make_patient(1, name='Simran Kaur', village='Bhadson')
    make_patient(2, name='Rajesh Singh', village='Gobindpura', phone='+91-98123')
    make_patient(3, name='Harjeet Singh', village='Nabha')
    assert [p['name'] for p in anon_client.get(URL, {'q': 'singh'}).data] == ['Rajesh Singh', 'Harjeet Singh']
    assert [p['name'] for p in anon_client.get(URL, {'q': 'BHAD'}).data] == ['Simran Kaur']
    assert [p['name'] for p in anon_client.get(URL, {'q': '98123'}).data] == ['Rajesh Singh']
    assert len(anon_client.get(URL, {'q': '   '}).data) == 3


def test_update_patient_partially(client):
    p = make_patient(1, phone='+91-1')
    r = client.put(f'{URL}?id={p.id}', {'village': ' Kheri ', 'phone': '  ', 'gender': ''}, format='json')
    assert r.status_code == 200
    assert r.data['village'] == 'Kheri'
    assert r.data['phone'] is None
    assert r.data['gender'] == 'other'
    assert r.data['name'] == 'Patient 1'
    assert r.data['age'] == 31


@pytest.mark.parametrize('body,code', [
    ({'name': ''}, 'INVALID_NAME'),
    ({'village': 7}, 'INVALID_VILLAGE'),
    ({'age': 0}, 'INVALID_AGE'),
    ({}, 'NO_UPDATES'),
    ({'unknown': 'x'}, 'NO_UPDATES'),
])
def test_update_patient_validation(client, body, code):
    p = make_patient()
    r = client.put(f'{URL}?id={p.id}', body, format='json')
    assert r.status_code == 400
    assert r.data['code'] == code
    p.refresh_from_db()
    assert p.name == 'Patient 1'


def test_update_missing_patient_is_404(client):
    r = client.put(f'{URL}?id=404', {'name': 'Nobody'}, format='json')
    assert r.status_code == 404


def test_delete_patient_cascades_records_and_detaches_appointments(client):
    p = make_patient()
    other = make_patient(2)
    Record.objects.create(patient=p, diagnosis='Viral fever', created_at='2024-11-01T00:00:00.000Z')
    Record.objects.create(patient=other, diagnosis='Hypertension', created_at='2024-11-01T00:00:00.000Z')
    appt = Appointment.objects.create(patient=p, doctor_name='Dr. Neha Gupta',
                                      scheduled_for='2024-12-04T16:00:00.000Z',
                                      created_at='2024-11-26T09:10:00.000Z')

    r = client.delete(f'{URL}?id={p.id}')
    assert r.status_code == 200
    assert r.data['message'] == 'Patient successfully deleted'
    assert r.data['patient']['id'] == p.id
    assert not Patient.objects.filter(pk=p.id).exists()
    assert list(Record.objects.values_list('diagnosis', flat=True)) == ['Hypertension']
    appt.refresh_from_db()
    assert appt.patient_id is None

    r = client.delete(f'{URL}?id={p.id}')
    assert r.status_code == 404


def test_malformed_json_is_reported(client):
    r = client.generic('POST', reverse('patients'), '{"name": ', content_type='application/json')
    assert r.status_code == 400
    assert r.data['code'] == 'INVALID_JSON'


def test_page_far_past_the_end_is_empty(anon_client):
    make_patient()
    r = anon_client.get(URL, {'page': '100000000000000000000', 'limit': 100})
    assert r.status_code == 200
    assert r.data == []


@pytest.mark.parametrize('age', [10 ** 30, 121, '99999999999999999999'])
def test_oversized_age_is_rejected(client, age):
    r = client.post(URL, {'name': 'Simran Kaur', 'age': age, 'village': 'Nabha'}, format='json')
    assert r.status_code == 400
    assert r.data['code'] == 'INVALID_AGE'
    assert Patient.objects.count() == 0
    p = make_patient()
    r = client.put(f'{URL}?id={p.id}', {'age': age}, format='json')
    assert r.data['code'] == 'INVALID_AGE'


def test_oldest_allowed_age(client):
    r = client.post(URL, {'name': 'Harjeet Singh', 'age': 120, 'village': 'Nabha'}, format='json')
    assert r.status_code == 201


@pytest.mark.parametrize('raw', ['1_0', '١٠', '+10', '10.0', '100000000000000000000'])
def test_id_must_be_plain_ascii_integer(anon_client, raw):
    for i in range(1, 11):
        make_patient(i)
    r = anon_client.get(URL, {'id': raw})
    assert r.status_code == 400
    assert r.data['code'] == 'INVALID_ID'


def test_numeric_string_age_with_underscores_is_rejected(client):
    r = client.post(URL, {'name': 'Simran Kaur', 'age': '3_2', 'village': 'Nabha'}, format='json')
    assert r.data['code'] == 'INVALID_AGE'
