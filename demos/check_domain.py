import asyncio
import logging
import sys
from ncdomains import api, domains
from ncdomains.registrar import Registrar


def check_result_str(result: domains.DomainCheckResult) -> str:
    sep = '-------------------------'
    string = f'\n{sep}\nDomain: {result.domain}\n'
    string += f"Available: {'yes' if result.available else 'no'}\n"
    if result.is_premium:
        string += f'Premium price: ${result.premium_price}\n'
    return string + sep


async def main() -> int:
    logging.basicConfig(level=logging.INFO)

    if len(sys.argv) < 2:
        names = input('Enter domain names to check (comma separated): ').split(',')
    else:
        names = sys.argv[1:]

    names = [name.strip() for name in names if name.strip()]

    try:
        credentials = api.ApiCredentials.from_env()
    except ValueError as exc:
        print(exc)
        return 2

    exit_code = 1
    async with Registrar(credentials) as registrar:
        try:
            results = await registrar.check_availability_bulk(names)
            for result in results:
                print(check_result_str(result))
            exit_code = 0
        except api.RemoteApiError as exc:
            print(f'The registrar rejected the request: {exc}')
        except api.TransportError as exc:
            print(f'Error checking domains, check your network connection {exc}')

    return exit_code


if __name__ == '__main__':
    sys.exit(
        asyncio.run(main())
    )
