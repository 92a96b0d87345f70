import pytest

from clinic.models import Patient, Record

pytestmark = pytest.mark.django_db

URL = '/api/records'


@pytest.fixture
def patient():
    return Patient.objects.create(name='Simran Kaur', age=32, village='Bhadson',
                                  created_at='2024-10-15T00:00:00.000Z')


def test_create_record_for_existing_patient(client, patient):
    r = client.post(URL, {'patientId': patient.id, 'diagnosis': ' Viral fever ',
                          'notes': 'Temperature 101F', 'prescription': ''}, format='json')
    assert r.status_code == 201
    assert r.data['patientId'] == patient.id
    assert r.data['diagnosis'] == 'Viral fever'
    assert r.data['notes'] == 'Temperature 101F'
    assert r.data['prescription'] is None


def test_record_for_unknown_patient_is_rejected(client):
    r = client.post(URL, {'patientId': 999, 'diagnosis': 'Viral fever'}, format='json')
    assert r.status_code == 400
    assert r.data['code'] == 'PATIENT_NOT_FOUND'
    assert Record.objects.count() == 0


@pytest.mark.parametrize('body,code', [
    ({'diagnosis': 'Viral fever'}, 'MISSING_PATIENT_ID'),
    ({'patientId': 'abc', 'diagnosis': 'Viral fever'}, 'MISSING_PATIENT_ID'),
    ({'patientId': 999}, 'MISSING_DIAGNOSIS'),
    ({'patientId': 999, 'diagnosis': '  '}, 'MISSING_DIAGNOSIS'),
])
def test_create_record_validation(client, body, code):
    r = client.post(URL, body, format='json')
    assert r.status_code == 400
    assert r.data['code'] == code


def test_update_record(client, patient):
    other = Patient.objects.create(name='Rajesh Singh', age=45, village='Gobindpura',
                                   created_at='2024-10-20T00:00:00.000Z')
    rec = Record.objects.create(patient=patient, diagnosis='Viral fever', notes='old',
                                created_at='2024-10-15T09:30:00.000Z')
    r = client.put(f'{URL}?id={rec.id}', {'patientId': str(other.id), 'notes': None}, format='json')
    assert r.status_code == 200
    assert r.data['patientId'] == other.id
    assert r.data['notes'] is None
    assert r.data['diagnosis'] == 'Viral fever'

    r = client.put(f'{URL}?id={rec.id}', {'patientId': 'x'}, format='json')
    assert r.data['code'] == 'INVALID_PATIENT_ID'
    r = client.put(f'{URL}?id={rec.id}', {'patientId': 999}, format='json')
    assert r.data['code'] == 'PATIENT_NOT_FOUND'
    r = client.put(f'{URL}?id={rec.id}', {'diagnosis': ''}, format='json')
    assert r.data['code'] == 'INVALID_DIAGNOSIS'
    r = client.put(f'{URL}?id={rec.id}', {}, format='json')
    assert r.data['code'] == 'NO_UPDATES'


def test_list_and_delete_records(client, anon_client, patient):
    Record.objects.create(patient=patient, diagnosis='Viral fever', created_at='2024-10-15T09:30:00.000Z')
    rec = Record.objects.create(patient=patient, diagnosis='Hypertension', notes='BP 150/95',
                                created_at='2024-10-20T11:00:00.000Z')
    assert [x['diagnosis'] for x in anon_client.get(URL, {'q': 'bp 150'}).data] == ['Hypertension']

    r = client.delete(f'{URL}?id={rec.id}')
    assert r.status_code == 200
    assert r.data['message'] == 'Record successfully deleted'
    assert r.data['record']['diagnosis'] == 'Hypertension'
    assert Record.objects.count() == 1


def test_record_for_out_of_range_patient_id(client):
    r = client.post(URL, {'patientId': 10 ** 30, 'diagnosis': 'Viral fever'}, format='json')
    assert r.status_code == 400
    assert r.data['code'] == 'PATIENT_NOT_FOUND'
    assert Record.objects.count() == 0
