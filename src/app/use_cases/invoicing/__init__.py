"""Invoicing use cases"""
from .create_invoice import CreateInvoice
from .update_invoice_after_correction import UpdateInvoiceAfterCorrection
from .update_invoice_status import UpdateInvoiceStatus
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .list_eligible_buyers import ListEligibleBuyers
from .generate_invoice_pdf import GenerateInvoicePdf
from .dtos import (
    LineItemInputDTO,
    CreateInvoiceCommandDTO,
    ResubmitInvoiceCommandDTO,
    UpdateStatusCommandDTO,
    InvoiceLineDTO,
    InvoiceResponseDTO,
    InvoiceSummaryDTO,
    ListInvoicesResponseDTO,
    BuyerDTO,
    ListBuyersResponseDTO,
    InvoicePdfResponseDTO,
)

__all__ = [
    "CreateInvoice",
    "UpdateInvoiceAfterCorrection",
    "UpdateInvoiceStatus",
    "GetInvoice",
    "ListInvoices",
    "ListEligibleBuyers",
    "GenerateInvoicePdf",
    "LineItemInputDTO",
    "CreateInvoiceCommandDTO",
    "ResubmitInvoiceCommandDTO",
    "UpdateStatusCommandDTO",
    "InvoiceLineDTO",
    "InvoiceResponseDTO",
    "InvoiceSummaryDTO",
    "ListInvoicesResponseDTO",
    "BuyerDTO",
    "ListBuyersResponseDTO",
    "InvoicePdfResponseDTO",
]
