K8S_AND_POSTGRES = """\
Running PostgreSQL on Kubernetes is less scary than it used to be. Operators
take care of failover, backups and minor upgrades, so the cluster mostly runs
itself.

![cluster](/images/cluster.png)

```yaml
apiVersion: postgresql.cnpg.io/v1
kind: Cluster
```

The remaining work is capacity planning and choosing the storage class.
"""


def front_matter(title: str, date: str, draft: bool = False, **extra) -> str:
    lines = [
        "+++",
        f"title = '{title}'",
        f"date = {date}",
        f"draft = {str(draft).lower()}",
    ]
    for key, value in extra.items():
        if isinstance(value, list):
            items = ", ".join(f'"{item}"' for item in value)
            lines.append(f"{key} = [{items}]")
        else:
            lines.append(f'{key} = "{value}"')
    lines.append("+++")
    return "\n".join(lines) + "\n"
