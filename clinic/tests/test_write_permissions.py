import pytest

from clinic.models import Appointment, AuditEvent, InventoryItem, Patient, Record

pytestmark = pytest.mark.django_db


@pytest.fixture
def rows():
    patient = Patient.objects.create(name='Simran Kaur', age=32, village='Bhadson',
                                     created_at='2024-10-15T00:00:00.000Z')
    return {
        'patients': patient,
        'records': Record.objects.create(patient=patient, diagnosis='Viral fever',
                                         created_at='2024-10-15T09:30:00.000Z'),
        'appointments': Appointment.objects.create(patient=patient, doctor_name='Dr. Rajesh Kumar',
                                                   scheduled_for='2024-12-02T10:00:00.000Z',
                                                   created_at='2024-11-25T10:35:00.000Z'),
        'inventory': InventoryItem.objects.create(medicine_name='Paracetamol 500mg',
                                                  pharmacy_name='Nabha Civil Hospital', stock=42,
                                                  last_updated='2024-11-26T09:00:00.000Z'),
    }


def bodies(patient_id):
    return {
        'patients': {'name': 'Rajesh Singh', 'age': 45, 'village': 'Gobindpura'},
        'records': {'patientId': patient_id, 'diagnosis': 'Hypertension'},
        'appointments': {'doctorName': 'Dr. Priya Sharma', 'scheduledFor': '2024-12-03T14:30:00.000Z'},
        'inventory': {'medicineName': 'ORS Pack', 'pharmacyName': 'Village PHC', 'stock': 80},
    }


def snapshot():
    return (
        list(Patient.objects.values()),
        list(Record.objects.values()),
        list(Appointment.objects.values()),
        list(InventoryItem.objects.values()),
    )


@pytest.mark.parametrize('resource', ['patients', 'records', 'appointments', 'inventory'])
@pytest.mark.parametrize('method', ['post', 'put', 'delete'])
def test_anonymous_writes_are_rejected_without_side_effects(anon_client, rows, resource, method):
    before = snapshot()
    url = f'/api/{resource}'
    body = bodies(rows['patients'].id)[resource]
    if method == 'post':
        r = anon_client.post(url, body, format='json')
    elif method == 'put':
        r = anon_client.put(f'{url}?id={rows[resource].id}', body, format='json')
    else:
        r = anon_client.delete(f'{url}?id={rows[resource].id}')
    assert r.status_code == 401
    assert r.data['code'] == 'AUTHENTICATION_REQUIRED'
    assert snapshot() == before
    assert AuditEvent.objects.count() == 0
