# metrycs/features/export/schemas.py
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ExportFormat(str, Enum):
    CSV = "csv"
    PDF = "pdf"


class ExportRequest(BaseModel):
    format: str = Field("csv", examples=["csv", "pdf"])


class PdfExportSummary(BaseModel):
    registrations: int
    attendance: int
    conversion_rate: str
    onchain_transactions: int
    wallets: int
    social_mentions: int


class PdfExportData(BaseModel):
    event_name: str
    event_code: str
    generated_at: datetime
    summary: PdfExportSummary


class PdfExportResponse(BaseModel):
    """Descriptor of a generated PDF export; the file itself is not rendered."""

    success: bool = True
    message: str = "PDF export generated successfully"
    format: ExportFormat = ExportFormat.PDF
    filename: str
    download_url: str = "#"
    data: PdfExportData
