"""takehome: UK take-home pay and personal finance calculators."""

__version__ = "0.1.0"

from takehome.analytics.marginal import MarginalRates as MarginalRates
from takehome.analytics.marginal import NetPayCurve as NetPayCurve
from takehome.analytics.marginal import marginal_rate_breakdown as marginal_rate_breakdown
from takehome.analytics.marginal import net_pay_curve as net_pay_curve
from takehome.calculators.age import AgeBreakdown as AgeBreakdown
from takehome.calculators.age import age_breakdown as age_breakdown
from takehome.calculators.loans import amortization_schedule as amortization_schedule
from takehome.calculators.loans import emi_payment as emi_payment
from takehome.calculators.loans import loan_summary as loan_summary
from takehome.calculators.loans import mortgage_summary as mortgage_summary
from takehome.calculators.sip import project_sip as project_sip
from takehome.calculators.vat import vat_breakdown as vat_breakdown
from takehome.config.defaults import default_input as default_input
from takehome.config.schema import AgeInput as AgeInput
from takehome.config.schema import CalculationInput as CalculationInput
from takehome.config.schema import LoanInput as LoanInput
from takehome.config.schema import MortgageInput as MortgageInput
from takehome.config.schema import Period as Period
from takehome.config.schema import Region as Region
from takehome.config.schema import SIPInput as SIPInput
from takehome.config.schema import StudentLoanPlan as StudentLoanPlan
from takehome.config.schema import TaxParameters as TaxParameters
from takehome.config.schema import VATInput as VATInput
from takehome.core.engine import CalculationResult as CalculationResult
from takehome.core.engine import compute_annual as compute_annual
from takehome.core.periods import PayBreakdown as PayBreakdown
from takehome.taxes.allowance import personal_allowance as personal_allowance
from takehome.taxes.bands import apportion_to_bands as apportion_to_bands
from takehome.taxes.national_insurance import (
    employee_national_insurance as employee_national_insurance,
)
from takehome.taxes.parameters import available_tax_years as available_tax_years
from takehome.taxes.parameters import load_tax_parameters as load_tax_parameters
from takehome.taxes.stamp_duty import stamp_duty as stamp_duty
from takehome.taxes.student_loan import student_loan_repayment as student_loan_repayment
from takehome.utils.exceptions import ConfigError as ConfigError
from takehome.utils.exceptions import TakehomeError as TakehomeError
from takehome.utils.exceptions import UnknownTaxYearError as UnknownTaxYearError
