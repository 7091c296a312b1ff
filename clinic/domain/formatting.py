import datetime as dt

from clinic.domain.models import Appointment, AppointmentView, Patient, TimePeriod


def format_date(date: dt.date) -> str:
    """Convert ``date(2024, 1, 5)`` → ``05 Jan 2024``."""
    return date.strftime("%d %b %Y")


def time_to_12h(time: dt.time) -> str:
    """Convert ``time(14, 30)`` → ``2:30 PM``.

    No leading zero on the hour (``9:00 AM`` not ``09:00 AM``).
    """
    hour = time.hour % 12 or 12
    period = "AM" if time.hour < 12 else "PM"
    return f"{hour}:{time.strftime('%M')} {period}"


def format_time_period(time_period: TimePeriod) -> str:
    return f"{time_to_12h(time_period.start)} - {time_to_12h(time_period.end)}"


def format_patient(patient: Patient) -> str:
    return (
        f"{patient.name}; NRIC: {patient.nric}; Gender: {patient.gender.value}; "
        f"DOB: {format_date(patient.dob)}; Phone: {patient.phone}; "
        f"Email: {patient.email}; Address: {patient.address}"
    )


def format_appointment(appointment: Appointment) -> str:
    text = (
        f"NRIC: {appointment.nric}; Date: {format_date(appointment.date)}; "
        f"Time: {format_time_period(appointment.time_period)}; "
        f"Type: {appointment.appointment_type}"
    )
    if appointment.note:
        text += f"; Note: {appointment.note}"
    return text + f"; Completed: {'Yes' if appointment.mark else 'No'}"


def format_appointment_view(view: AppointmentView) -> str:
    return f"{view.patient_name}; {format_appointment(view.appointment)}"
