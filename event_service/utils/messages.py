"""Localized message catalog for response envelopes and validation errors."""

from typing import Dict

DEFAULT_LOCALE = 'en'

MESSAGES: Dict[str, Dict[str, str]] = {
    'en': {
        # Envelope messages
        'list.success': "Successfully retrieved all events",
        'list.failed': "Failed to retrieve events",
        'trashed.success': "Successfully retrieved deleted events",
        'trashed.failed': "Failed to retrieve deleted events",
        'create.success': "Event created successfully",
        'create.failed': "Failed to create event",
        'show.success': "Successfully retrieved event",
        'show.failed': "Failed to retrieve event",
        'update.success': "Event updated successfully",
        'update.failed': "Failed to update event",
        'delete.success': "Event deleted successfully",
        'delete.failed': "Failed to delete event",
        'bulk_delete.success': "Deleted {count} events",
        'bulk_delete.failed': "Failed to delete events",
        'soft_delete.success': "Event deleted successfully (soft delete)",
        'soft_delete.failed': "Failed to delete event",
        'restore.success': "Event restored successfully",
        'restore.failed': "Failed to restore event",
        'restore.not_deleted': "Event is not in a deleted state",
        'force_delete.success': "Event permanently deleted",
        'force_delete.failed': "Failed to permanently delete event",
        'not_found': "Event not found",
        'validation_failed': "Validation failed",
        # Field-level validation messages
        'field.required': "The {field} field is required.",
        'field.string': "The {field} field must be a string.",
        'field.max': "The {field} field must not be greater than {max} characters.",
        'field.date': "The {field} field must be a valid date.",
        'field.array': "The {field} field must be an array.",
        'field.min_items': "The {field} field must have at least {min} items.",
        'field.integer': "The {field} field must be an integer.",
        'field.exists': "The selected {field} is invalid.",
        'field.invalid': "The {field} field is invalid.",
        'body.invalid': "The request body must be a valid JSON object.",
    },
    'id': {
        'list.success': "Berhasil menampilkan semua kegiatan",
        'list.failed': "Gagal menampilkan semua kegiatan",
        'trashed.success': "Berhasil menampilkan kegiatan yang terhapus",
        'trashed.failed': "Gagal menampilkan kegiatan yang terhapus",
        'create.success': "Kegiatan berhasil disimpan",
        'create.failed': "Gagal membuat kegiatan",
        'show.success': "Berhasil menampilkan kegiatan",
        'show.failed': "Gagal menampilkan kegiatan",
        'update.success': "Kegiatan berhasil diperbarui",
        'update.failed': "Gagal memperbarui kegiatan",
        'delete.success': "Kegiatan berhasil dihapus",
        'delete.failed': "Gagal menghapus kegiatan",
        'bulk_delete.success': "Berhasil menghapus {count} kegiatan",
        'bulk_delete.failed': "Gagal menghapus kegiatan",
        'soft_delete.success': "Kegiatan berhasil dihapus (soft delete)",
        'soft_delete.failed': "Gagal menghapus kegiatan",
        'restore.success': "Kegiatan berhasil dipulihkan",
        'restore.failed': "Gagal memulihkan kegiatan",
        'restore.not_deleted': "Kegiatan tidak dalam kondisi terhapus",
        'force_delete.success': "Kegiatan berhasil dihapus permanen",
        'force_delete.failed': "Gagal menghapus kegiatan secara permanen",
        'not_found': "Kegiatan tidak ditemukan",
        'validation_failed': "Validasi gagal",
        'field.required': "Kolom {field} wajib diisi.",
        'field.string': "Kolom {field} harus berupa teks.",
        'field.max': "Kolom {field} tidak boleh lebih dari {max} karakter.",
        'field.date': "Kolom {field} harus berupa tanggal yang valid.",
        'field.array': "Kolom {field} harus berupa array.",
        'field.min_items': "Kolom {field} harus memiliki minimal {min} item.",
        'field.integer': "Kolom {field} harus berupa bilangan bulat.",
        'field.exists': "{field} yang dipilih tidak valid.",
        'field.invalid': "Kolom {field} tidak valid.",
        'body.invalid': "Isi permintaan harus berupa objek JSON yang valid.",
    },
}

class Messages:
    """Look up and format messages for one locale, falling back to English."""

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self.locale = locale if locale in MESSAGES else DEFAULT_LOCALE
        self._catalog = MESSAGES[self.locale]

    def get(self, key: str, **params) -> str:
        template = self._catalog.get(key) or MESSAGES[DEFAULT_LOCALE].get(key, key)
        return template.format(**params) if params else template
