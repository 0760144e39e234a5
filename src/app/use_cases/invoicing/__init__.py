"""Invoicing use cases"""
from .estimate_totals import EstimateTotals
from .create_company import CreateCompany
from .list_companies import ListCompanies
from .create_customer import CreateCustomer
from .list_customers import ListCustomers
from .register_car import RegisterCar
from .list_cars import ListCars
from .get_car import GetCar
from .record_service_visit import RecordServiceVisit
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .replace_invoice_lines import ReplaceInvoiceLines
from .mark_invoice_sent import MarkInvoiceSent
from .mark_invoice_paid import MarkInvoicePaid
from .delete_invoice import DeleteInvoice
from .list_unpaid_invoices import ListUnpaidInvoices
from .list_upcoming_services import ListUpcomingServices
from .get_revenue_stats import GetRevenueStats
from .dtos import (
    LineItemInputDTO,
    EstimateTotalsCommandDTO,
    TotalsResponseDTO,
    CreateCompanyCommandDTO,
    CompanyResponseDTO,
    ListCompaniesResponseDTO,
    CreateCustomerCommandDTO,
    CustomerResponseDTO,
    ListCustomersResponseDTO,
    RegisterCarCommandDTO,
    CarResponseDTO,
    ListCarsResponseDTO,
    CarServiceVisitDTO,
    CarDetailResponseDTO,
    RecordServiceVisitCommandDTO,
    ServiceVisitResponseDTO,
    LineItemDTO,
    InvoiceSummaryDTO,
    InvoiceResponseDTO,
    ServiceVisitRecordedResponseDTO,
    ListInvoicesResponseDTO,
    ReplaceLineItemsCommandDTO,
    MarkInvoicePaidCommandDTO,
    UnpaidInvoiceDTO,
    ListUnpaidInvoicesResponseDTO,
    UpcomingServiceDTO,
    ListUpcomingServicesResponseDTO,
    RevenueStatsResponseDTO,
    DueDigestResultDTO,
)

__all__ = [
    "EstimateTotals",
    "CreateCompany",
    "ListCompanies",
    "CreateCustomer",
    "ListCustomers",
    "RegisterCar",
    "ListCars",
    "GetCar",
    "RecordServiceVisit",
    "GetInvoice",
    "ListInvoices",
    "ReplaceInvoiceLines",
    "MarkInvoiceSent",
    "MarkInvoicePaid",
    "DeleteInvoice",
    "ListUnpaidInvoices",
    "ListUpcomingServices",
    "GetRevenueStats",
    "LineItemInputDTO",
    "EstimateTotalsCommandDTO",
    "TotalsResponseDTO",
    "CreateCompanyCommandDTO",
    "CompanyResponseDTO",
    "ListCompaniesResponseDTO",
    "CreateCustomerCommandDTO",
    "CustomerResponseDTO",
    "ListCustomersResponseDTO",
    "RegisterCarCommandDTO",
    "CarResponseDTO",
    "ListCarsResponseDTO",
    "CarServiceVisitDTO",
    "CarDetailResponseDTO",
    "RecordServiceVisitCommandDTO",
    "ServiceVisitResponseDTO",
    "LineItemDTO",
    "InvoiceSummaryDTO",
    "InvoiceResponseDTO",
    "ServiceVisitRecordedResponseDTO",
    "ListInvoicesResponseDTO",
    "ReplaceLineItemsCommandDTO",
    "MarkInvoicePaidCommandDTO",
    "UnpaidInvoiceDTO",
    "ListUnpaidInvoicesResponseDTO",
    "UpcomingServiceDTO",
    "ListUpcomingServicesResponseDTO",
    "RevenueStatsResponseDTO",
    "DueDigestResultDTO",
]
