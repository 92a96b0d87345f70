"""
Management command to populate the database with demo clinic data.
"""
from django.core.management.base import BaseCommand
from django.db import transaction

from clinic.models import Appointment, InventoryItem, Patient, Record

PATIENTS = [
    {'name': 'Simran Kaur', 'gender': 'female', 'age': 32, 'village': 'Bhadson',
     'phone': '+91-9812345670', 'created_at': '2024-10-15T00:00:00.000Z'},
    {'name': 'Rajesh Singh', 'gender': 'male', 'age': 45, 'village': 'Gobindpura',
     'phone': '+91-9812345671', 'created_at': '2024-10-20T00:00:00.000Z'},
    {'name': 'Gurpreet Kaur', 'gender': 'female', 'age': 28, 'village': 'Kheri',
     'phone': '+91-9812345672', 'created_at': '2024-11-01T00:00:00.000Z'},
    {'name': 'Harjeet Singh', 'gender': 'male', 'age': 67, 'village': 'Nabha',
     'phone': '+91-9812345673', 'created_at': '2024-11-10T00:00:00.000Z'},
    {'name': 'Amrita Singh', 'gender': 'female', 'age': 54, 'village': 'Rohti Chhanna',
     'phone': None, 'created_at': '2024-11-18T00:00:00.000Z'},
]

# (patient index, diagnosis, notes, prescription, created_at)
RECORDS = [
    (0, 'Viral fever', 'Temperature 101F for two days', 'Paracetamol 500mg TDS x 3 days', '2024-10-15T09:30:00.000Z'),
    (1, 'Hypertension', 'BP 150/95, advised low salt diet', 'Amlodipine 5mg OD', '2024-10-20T11:00:00.000Z'),
    (2, 'Acute gastroenteritis', 'Mild dehydration', 'ORS, Zinc 20mg OD x 14 days', '2024-11-01T10:15:00.000Z'),
    (3, 'Type 2 diabetes follow-up', 'Fasting sugar 142 mg/dL', 'Metformin 500mg BD', '2024-11-10T12:45:00.000Z'),
    (0, 'Upper respiratory infection', 'Cough for 4 days', 'Steam inhalation, Cetirizine 10mg HS', '2024-11-20T08:50:00.000Z'),
]

# (patient index or None, doctor, scheduled_for, status, created_at)
APPOINTMENTS = [
    (0, 'Dr. Rajesh Kumar', '2024-12-02T10:00:00.000Z', Appointment.STATUS_SCHEDULED, '2024-11-25T10:35:00.000Z'),
    (1, 'Dr. Priya Sharma', '2024-12-03T14:30:00.000Z', Appointment.STATUS_SCHEDULED, '2024-11-25T11:20:00.000Z'),
    (2, 'Dr. Amarjeet Singh', '2024-11-22T09:00:00.000Z', Appointment.STATUS_COMPLETED, '2024-11-15T08:45:00.000Z'),
    (None, 'Dr. Neha Gupta', '2024-12-04T16:00:00.000Z', Appointment.STATUS_SCHEDULED, '2024-11-26T09:10:00.000Z'),
    (3, 'Dr. Rajesh Kumar', '2024-11-28T11:30:00.000Z', Appointment.STATUS_CANCELLED, '2024-11-20T15:05:00.000Z'),
]

INVENTORY = [
    ('Paracetamol 500mg', 'Nabha Civil Hospital', 42),
    ('Azithromycin 250mg', 'Nabha Civil Hospital', 20),
    ('ORS Pack', 'Village PHC', 80),
    ('Amoxicillin 500mg', 'Village PHC', 12),
    ('Cetirizine 10mg', 'Private Chemist', 50),
]
INVENTORY_UPDATED = '2024-11-26T09:00:00.000Z'


class Command(BaseCommand):
    help = 'Populate the database with demo patients, records, appointments and inventory'

    def add_arguments(self, parser):
        parser.add_argument('--force', action='store_true', help='Seed even if patients already exist.')

    @transaction.atomic
    def handle(self, *args, **options):
        if Patient.objects.exists() and not options['force']:
            self.stdout.write(self.style.WARNING('Patients already exist; use --force to seed anyway.'))
            return

        patients = [Patient.objects.create(**data) for data in PATIENTS]
        for idx, diagnosis, notes, prescription, created_at in RECORDS:
            Record.objects.create(patient=patients[idx], diagnosis=diagnosis, notes=notes,
                                  prescription=prescription, created_at=created_at)
        for idx, doctor, scheduled_for, status, created_at in APPOINTMENTS:
            Appointment.objects.create(patient=patients[idx] if idx is not None else None,
                                       doctor_name=doctor, scheduled_for=scheduled_for,
                                       status=status, created_at=created_at)
        for medicine, pharmacy, stock in INVENTORY:
            InventoryItem.objects.create(medicine_name=medicine, pharmacy_name=pharmacy,
                                         stock=stock, last_updated=INVENTORY_UPDATED)

        self.stdout.write(self.style.SUCCESS(
            f'Seeded {len(PATIENTS)} patients, {len(RECORDS)} records, '
            f'{len(APPOINTMENTS)} appointments and {len(INVENTORY)} inventory items.'
        ))
