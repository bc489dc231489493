import time

import clinics
from clinics import Clinic


def main() -> None:
    client = clinics.run(port=57794)
    if isinstance(client, clinics.ClinicsServer):
        client = client.client()

    client.add_clinic(Clinic("C001", "Alpha Clinic", "Warsaw", "Dermatology"))
    client.add_clinic(Clinic("C002", "Beta Clinic", "Krakow", "Cardiology"))
    print("warsaw:", sorted(c.id for c in client.search_by_city("warsaw")))

    client.update_specialty("C002", "Neurology")
    print("specialties:", client.list_specialties())

    try:
        while True:
            time.sleep(3600)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
