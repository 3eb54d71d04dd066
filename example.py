from datetime import date

from sbp_fx import Currency, SBPFx

print(SBPFx.__version__)  # 0.1.0

fx = SBPFx()

# Rate sheet location for a given day
print(fx.url(date(2025, 8, 27)))
# => https://www.sbp.org.pk/ecodata/rates/m2m/2025/Aug/27-Aug-25.pdf

# All READY (spot) rates published on a day
rates = fx.exchange_rates("2025-08-27")
for currency, rate in rates.items():
    print(currency, rate.ready)

# A single currency
usd = fx.exchange_rate(Currency.USD, date(2025, 8, 27))
print(usd.as_dict())
# => {'currency': 'USD', 'date': '2025-08-27', 'url': '...', 'ready': '...'}

# Keep the raw PDF
fx.download_rate_sheet("rate_sheets/27-Aug-25.pdf", "2025-08-27")
