import asyncio
import logging
import sys
from ncdomains import api, dns
from ncdomains.registrar import Registrar


def zone_str(zone: dns.ZoneRecordSet) -> str:
    sep = '-------------------------'
    string = f'\n{sep}\nDNS records for {zone.domain}\n'
    if not zone.records:
        return string + f'No DNS records found.\n{sep}'

    for rtype in dns.RECORD_TYPES:
        records = zone.of_type(rtype)
        if not records:
            continue
        string += f'{rtype} Records:\n'
        for record in records:
            string += f'  {record.name or dns.APEX} -> {record.address}'
            if record.type == 'MX' and record.mx_pref is not None:
                string += f' (Priority: {record.mx_pref})'
            if record.ttl is not None:
                string += f' [TTL: {record.ttl}]'
            string += '\n'
    return string + sep


async def main() -> int:
    '''
    usage: dns_records.py DOMAIN [add NAME TYPE ADDRESS | delete NAME TYPE]
    '''
    logging.basicConfig(level=logging.INFO)

    if len(sys.argv) < 2:
        domain = input('Enter a domain to list DNS records for: ').strip()
        action = []
    else:
        domain, action = sys.argv[1].strip(), sys.argv[2:]

    try:
        credentials = api.ApiCredentials.from_env()
    except ValueError as exc:
        print(exc)
        return 2

    async with Registrar(credentials) as registrar:
        try:
            match action:
                case ['add', name, rtype, address]:
                    record = dns.DNSRecord(name=name, type=rtype.upper(), address=address)
                    await registrar.add_dns_record(domain, record)
                case ['delete', name, rtype]:
                    dropped = await registrar.delete_dns_record(
                        domain, {'name': name, 'type': rtype.upper()}
                    )
                    print(f'Deleted {dropped} record(s)')
                case []:
                    pass
                case _:
                    print(main.__doc__)
                    return 2

            print(zone_str(await registrar.get_zone(domain)))
        except api.RegistrarError as exc:
            print(f'Error managing DNS records for {domain}: {exc}')
            return 1

    return 0


if __name__ == '__main__':
    sys.exit(
        asyncio.run(main())
    )
