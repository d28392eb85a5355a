import argparse, json, httpx

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('--name', required=True)
    ap.add_argument('--email', required=True)
    ap.add_argument('--date', help='YYYY-MM-DD (default: today, UTC, on the server)')
    ap.add_argument('--time', help='HH:MM (default: 12:00)')
    ap.add_argument('--description')
    ap.add_argument('--event', default='schedule_appointment')
    ap.add_argument('--host', default='http://localhost:3000', help='Service host')
    args = ap.parse_args()

    data = {'name': args.name, 'email': args.email}
    for key in ('date', 'time', 'description'):
        value = getattr(args, key)
        if value:
            data[key] = value

    payload = {'event': args.event, 'data': data}
    print(json.dumps(payload, indent=2))

    with httpx.Client(timeout=30.0) as client:
        r = client.post(f"{args.host}/webhook", json=payload)
        print(r.status_code, r.text)

if __name__ == '__main__':
    main()
