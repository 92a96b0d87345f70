from clinic.models import Appointment, InventoryItem, Patient, Record


def entity_counts() -> dict:
    return {
        'patients': Patient.objects.count(),
        'records': Record.objects.count(),
        'appointments': Appointment.objects.count(),
        'inventory': InventoryItem.objects.count(),
    }
