import asyncio
import sys
from ncdomains import api, suggest
from ncdomains.registrar import Registrar


async def main() -> int:
    if len(sys.argv) < 2:
        keyword = input('Enter a keyword to build domain suggestions from: ').strip()
    else:
        keyword = sys.argv[1].strip()

    try:
        credentials = api.ApiCredentials.from_env()
    except ValueError as exc:
        print(exc)
        return 2

    async with Registrar(credentials) as registrar:
        try:
            report = await suggest.suggest_domains(registrar, keyword)
        except (ValueError, api.RegistrarError) as exc:
            print(f'Error checking suggestions: {exc}')
            return 1

    print(f'Available ({len(report.available)}):')
    for result in report.available:
        print(f'  - {result.domain}')

    print(f'Premium ({len(report.premium)}):')
    for result in report.premium:
        print(f'  - {result.domain} (${result.premium_price})')

    print(f'Unavailable: {len(report.unavailable)} domain(s)')
    return 0


if __name__ == '__main__':
    sys.exit(
        asyncio.run(main())
    )
