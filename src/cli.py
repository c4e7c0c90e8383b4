"""Command Line Interface for the dental records core.

Read-only views over a patients JSON file joined with an appointments JSON
file: list patients with their appointment summary and balance, search them,
and show one patient's full record including chart notes.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from src.adapters.appointment_ledger import InMemoryAppointmentLedger
from src.adapters.patient_store import JSONFilePatientStore
from src.domain.appointments import Appointment
from src.domain.context import EmptyLedger, RecordContext
from src.domain.patient import Patient
from src.domain.ports import PatientNotFoundError, StoreError
from src.infrastructure.formatting import format_date, format_money
from src.infrastructure.logging_config import setup_logging
from src.infrastructure.settings import settings

app = typer.Typer(
    name="dental-records",
    help="Dental Records: patients, dental charts and ledger summaries",
    add_completion=False
)
console = Console()

PatientsOption = typer.Option(None, "--patients", "-p", help="Patients JSON file")
AppointmentsOption = typer.Option(None, "--appointments", "-a", help="Appointments JSON file")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")


def open_store(patients_file: Optional[Path], appointments_file: Optional[Path]) -> JSONFilePatientStore:
    """Load the patient store wired to the appointment ledger."""
    patients_path = patients_file or Path(settings.patients_file)
    appointments_path = appointments_file or Path(settings.appointments_file)

    try:
        if appointments_path.exists():
            ledger = InMemoryAppointmentLedger.from_json_file(appointments_path)
        else:
            ledger = EmptyLedger()
        store = JSONFilePatientStore(patients_path, context=RecordContext(appointments=ledger))
        store.load()
    except StoreError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)

    if store.rejected:
        console.print(f"[yellow]⚠[/yellow] {len(store.rejected)} patient record(s) could not be loaded")
    return store


def _describe(appointment: Optional[Appointment]) -> str:
    if appointment is None:
        return "-"
    when = format_date(appointment.date, settings.date_format)
    return f"{when} {appointment.treatment_type}".strip()


def _balance(patient: Patient) -> str:
    difference = patient.difference_amount
    if difference < 0:
        return f"[red]owes {format_money(patient.outstanding_amount)}[/red]"
    if difference > 0:
        return f"[green]overpaid {format_money(patient.overpaid_amount)}[/green]"
    return "-"


def _patients_table(patients: list[Patient], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Age", justify="right")
    table.add_column("Next appointment")
    table.add_column("Last appointment")
    table.add_column("Balance")
    for patient in patients:
        table.add_row(
            patient.id,
            patient.name,
            str(patient.age),
            _describe(patient.next_appointment),
            _describe(patient.last_appointment),
            _balance(patient),
        )
    return table


def _configure_logging(verbose: bool) -> None:
    setup_logging(use_json=settings.log_json, log_level="DEBUG" if verbose else settings.log_level)


@app.command("list")
def list_patients(
    patients_file: Optional[Path] = PatientsOption,
    appointments_file: Optional[Path] = AppointmentsOption,
    verbose: bool = VerboseOption,
) -> None:
    """List all patients with their appointment summary and balance."""
    _configure_logging(verbose)
    store = open_store(patients_file, appointments_file)
    patients = store.list_all()
    if not patients:
        console.print("No patients found")
        return
    console.print(_patients_table(patients, f"{settings.app_name}: {len(patients)} patients"))


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for (name, phone, notes, ...)"),
    patients_file: Optional[Path] = PatientsOption,
    appointments_file: Optional[Path] = AppointmentsOption,
    verbose: bool = VerboseOption,
) -> None:
    """Search patients by any indexed text."""
    _configure_logging(verbose)
    store = open_store(patients_file, appointments_file)
    matches = store.search(query)
    if not matches:
        console.print(f"No patients match '{query}'")
        raise typer.Exit(code=1)
    console.print(_patients_table(matches, f"{len(matches)} match(es) for '{query}'"))


@app.command()
def show(
    patient_id: str = typer.Argument(..., help="Patient identifier"),
    patients_file: Optional[Path] = PatientsOption,
    appointments_file: Optional[Path] = AppointmentsOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show one patient's record, balance and chart notes."""
    _configure_logging(verbose)
    store = open_store(patients_file, appointments_file)
    try:
        patient = store.get(patient_id)
    except PatientNotFoundError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)

    console.print(f"\n[bold blue]{patient.name}[/bold blue] [dim]({patient.id})[/dim]")
    details = Table(show_header=False, box=None, padding=(0, 2))
    details.add_row("Age:", str(patient.age))
    details.add_row("Birth year:", str(patient.birth_year))
    details.add_row("Gender:", patient.gender.value)
    details.add_row("Phone:", patient.phone or "-")
    details.add_row("Email:", patient.email or "-")
    details.add_row("Address:", patient.address or "-")
    details.add_row("Labels:", ", ".join(label.text for label in patient.labels) or "-")
    details.add_row("Medical history:", "; ".join(patient.medical_history) or "-")
    details.add_row("Next appointment:", _describe(patient.next_appointment))
    details.add_row("Last appointment:", _describe(patient.last_appointment))
    details.add_row("Total payments:", format_money(patient.total_payments))
    details.add_row("Balance:", _balance(patient))
    console.print(details)

    charted = [tooth for _, tooth in sorted(patient.chart.items()) if tooth.notes]
    if charted:
        chart = Table(title="Dental chart notes")
        chart.add_column("Tooth", justify="right")
        chart.add_column("Condition")
        chart.add_column("Notes")
        for tooth in charted:
            chart.add_row(str(tooth.position), tooth.condition.value, "\n".join(tooth.notes))
        console.print(chart)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
