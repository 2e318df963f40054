from zonesync import Changes, new_endpoint, provider_factory



def main():
    # Example usage of the provider factory
    azure_config = {
        "subscription_id": "00000000-0000-0000-0000-000000000000",
        "resource_group": "dns",
        "domain_filter": ["example.com"],
        "dry_run": True,
    }

    provider = provider_factory("azure", azure_config)
    for endpoint in provider.records():
        print(endpoint)

    provider.apply_changes(
        Changes(create=[new_endpoint("www.example.com", "1.2.3.4", "A", 3600)])
    )

if __name__ == "__main__":
    main()
