PATIENT_NOT_FOUND = "No patient with the given NRIC exists."
DUPLICATE_PATIENT = "A patient with this NRIC already exists."
APPOINTMENT_NOT_FOUND = "No appointment matches the given NRIC, date and time."
DUPLICATE_APPOINTMENT = "This appointment already exists."
OVERLAPPING_APPOINTMENT = "This appointment overlaps another appointment of the same patient."
APPOINTMENT_BEFORE_DOB = "The appointment date cannot be before the patient's date of birth."
DOB_AFTER_APPOINTMENT = "The new date of birth is after an existing appointment of this patient."
NOTHING_EDITED = "At least one field to edit must be provided."
UNEXPECTED_ERROR = "An unexpected error occurred while running the command."

PATIENTS_LISTED = "{count} patient(s) listed!"
APPOINTMENTS_LISTED = "{count} appointment(s) listed!"

CHANGE_NOT_SAVED = "The change was applied but could not be saved to file: {error}"
