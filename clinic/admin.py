"""
Django admin registrations for the clinic models.

Lets staff inspect and correct clinic data through ``/admin/`` during
development and support.
"""

from django.contrib import admin

from .models import Appointment, AuditEvent, InventoryItem, Patient, Record


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'age', 'gender', 'village', 'phone', 'created_at')
    list_filter = ('gender', 'village')
    search_fields = ('name', 'village', 'phone')


@admin.register(Record)
class RecordAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'diagnosis', 'created_at')
    search_fields = ('diagnosis', 'notes', 'patient__name')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'doctor_name', 'patient', 'scheduled_for', 'status')
    list_filter = ('status',)
    search_fields = ('doctor_name', 'patient__name')


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ('id', 'medicine_name', 'pharmacy_name', 'stock', 'last_updated')
    list_filter = ('pharmacy_name',)
    search_fields = ('medicine_name', 'pharmacy_name')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'action', 'object_type', 'object_id', 'user')
    list_filter = ('action', 'object_type')
    readonly_fields = ('created_at',)
