"""
Static category tree configuration.

NAVIGATION_MENU is plain nested data (name / path / icon / children) so it
can be edited without touching the node classes.  TaxonomyStore.from_config()
turns it into CategoryNode objects exactly once.

Two namespaces live side by side:
  /categories/<category>/<subcategory>/<leaf>   — topical browsing
  /emergency/<area>/<leaf>                      — priority / urgency browsing
"""

__all__ = [
    "CATEGORIES_NAMESPACE",
    "EMERGENCY_NAMESPACE",
    "NAVIGATION_MENU",
]

CATEGORIES_NAMESPACE = "categories"
EMERGENCY_NAMESPACE  = "emergency"


def _leaves(prefix: str, *items: tuple[str, str]) -> list[dict]:
    return [{"name": name, "path": f"{prefix}/{slug}"} for name, slug in items]


NAVIGATION_MENU: list[dict] = [
    {
        "name": "System Admin",
        "path": "/categories/system-admin",
        "icon": "🖥️",
        "children": [
            {
                "name": "Users & Permissions",
                "path": "/categories/system-admin/users-permissions",
                "icon": "👥",
                "children": _leaves(
                    "/categories/system-admin/users-permissions",
                    ("Linux User Management", "linux-user-management"),
                    ("Active Directory Users", "active-directory-users"),
                    ("Bulk Password Reset", "bulk-password-reset"),
                ),
            },
            {
                "name": "Updates & Patching",
                "path": "/categories/system-admin/updates-patching",
                "icon": "🔄",
                "children": _leaves(
                    "/categories/system-admin/updates-patching",
                    ("Linux Updates Automation", "linux-updates-automation"),
                    ("Windows Updates Automation", "windows-updates-automation"),
                    ("Patch Status Reports", "patch-status-reports"),
                ),
            },
            {
                "name": "File & Local Backup",
                "path": "/categories/system-admin/file-local-backup",
                "icon": "💾",
                "children": _leaves(
                    "/categories/system-admin/file-local-backup",
                    ("Incremental Backup (rsync)", "incremental-backup"),
                    ("Windows Backup Scripts", "windows-backup-scripts"),
                    ("Cleanup Temporary Files", "cleanup-temp-files"),
                ),
            },
            {
                "name": "Processes & Services",
                "path": "/categories/system-admin/processes-services",
                "icon": "⚙️",
                "children": _leaves(
                    "/categories/system-admin/processes-services",
                    ("Linux Service Watchdog", "linux-service-watchdog"),
                    ("Windows Service Monitoring", "windows-service-monitoring"),
                    ("Automated Task Scheduler", "automated-task-scheduler"),
                ),
            },
        ],
    },
    {
        "name": "Security",
        "path": "/categories/security",
        "icon": "🔒",
        "children": [
            {
                "name": "Hardening",
                "path": "/categories/security/hardening",
                "icon": "🛡️",
                "children": _leaves(
                    "/categories/security/hardening",
                    ("Linux Server Hardening", "linux-server-hardening"),
                    ("Windows Server Hardening", "windows-server-hardening"),
                    ("Disable Unnecessary Services", "disable-unnecessary-services"),
                ),
            },
            {
                "name": "Firewall & IPS",
                "path": "/categories/security/firewall-ips",
                "icon": "🧱",
                "children": _leaves(
                    "/categories/security/firewall-ips",
                    ("Linux Firewall (iptables)", "linux-firewall"),
                    ("Windows Firewall Management", "windows-firewall"),
                    ("Open Ports Scanning", "open-ports-scanning"),
                ),
            },
            {
                "name": "Auditing & Compliance",
                "path": "/categories/security/auditing-compliance",
                "icon": "📋",
                "children": _leaves(
                    "/categories/security/auditing-compliance",
                    ("Password Audit", "password-audit"),
                    ("Critical File Integrity", "file-integrity"),
                    ("Compliance Reporting", "compliance-reporting"),
                ),
            },
        ],
    },
    {
        "name": "Network",
        "path": "/categories/network",
        "icon": "📡",
        "children": [
            {
                "name": "Network Setup & IP",
                "path": "/categories/network/setup-ip",
                "icon": "🌐",
                "children": _leaves(
                    "/categories/network/setup-ip",
                    ("Linux Network Configuration", "linux-network-config"),
                    ("Windows Network Configuration", "windows-network-config"),
                    ("VLAN & Routing Automation", "vlan-routing-automation"),
                ),
            },
            {
                "name": "Diagnostics & Tools",
                "path": "/categories/network/diagnostics-tools",
                "icon": "🔍",
                "children": _leaves(
                    "/categories/network/diagnostics-tools",
                    ("Multi-host Ping & Latency", "multi-host-ping"),
                    ("Automated Traceroute", "automated-traceroute"),
                    ("Port & Service Checks", "port-service-checks"),
                ),
            },
            {
                "name": "DNS & DHCP",
                "path": "/categories/network/dns-dhcp",
                "icon": "🏷️",
                "children": _leaves(
                    "/categories/network/dns-dhcp",
                    ("DNS Resolution Testing", "dns-resolution-testing"),
                    ("DNS Records Automation", "dns-records-automation"),
                    ("Dynamic DNS Scripts", "dynamic-dns-scripts"),
                ),
            },
        ],
    },
    {
        "name": "Cloud & Containers",
        "path": "/categories/cloud-containers",
        "icon": "☁️",
        "children": [
            {
                "name": "AWS Automation",
                "path": "/categories/cloud-containers/aws-automation",
                "icon": "☁️",
                "children": _leaves(
                    "/categories/cloud-containers/aws-automation",
                    ("EC2 Management Scripts", "ec2-management"),
                    ("S3 Automated Backup", "s3-backup"),
                    ("IAM User Management", "iam-user-management"),
                ),
            },
            {
                "name": "Azure Automation",
                "path": "/categories/cloud-containers/azure-automation",
                "icon": "☁️",
                "children": _leaves(
                    "/categories/cloud-containers/azure-automation",
                    ("Azure VM Provisioning", "vm-provisioning"),
                    ("Azure AD Automation", "ad-automation"),
                    ("Azure Backup & Snapshots", "backup-snapshots"),
                ),
            },
            {
                "name": "Google Cloud Automation",
                "path": "/categories/cloud-containers/gcp-automation",
                "icon": "☁️",
                "children": _leaves(
                    "/categories/cloud-containers/gcp-automation",
                    ("Compute Engine Automation", "compute-engine"),
                    ("Kubernetes (GKE) Automation", "gke-automation"),
                    ("Cloud Storage Tools", "cloud-storage"),
                ),
            },
            {
                "name": "Kubernetes & Docker",
                "path": "/categories/cloud-containers/kubernetes-docker",
                "icon": "🐳",
                "children": _leaves(
                    "/categories/cloud-containers/kubernetes-docker",
                    ("Docker Environment Setup", "docker-setup"),
                    ("Kubernetes Maintenance", "kubernetes-maintenance"),
                    ("Container Cleanup Scripts", "container-cleanup"),
                ),
            },
        ],
    },
    {
        "name": "Emergency",
        "path": "/emergency",
        "icon": "🚨",
        "children": [
            {
                "name": "Incident Response",
                "path": "/emergency/incident-response",
                "icon": "🆘",
                "children": _leaves(
                    "/emergency/incident-response",
                    ("Log & Evidence Collection", "log-evidence-collection"),
                    ("Host Isolation Tools", "host-isolation"),
                    ("IP Blocking Scripts", "ip-blocking"),
                ),
            },
            {
                "name": "Forensics Analysis",
                "path": "/emergency/forensics",
                "icon": "🔍",
                "children": _leaves(
                    "/emergency/forensics",
                    ("Memory Dumping", "memory-dumping"),
                    ("IOC Scanning", "ioc-scanning"),
                    ("Automated Forensics Reports", "automated-reports"),
                ),
            },
            {
                "name": "Disaster Recovery",
                "path": "/emergency/disaster-recovery",
                "icon": "🔄",
                "children": _leaves(
                    "/emergency/disaster-recovery",
                    ("File Recovery from Backup", "file-recovery"),
                    ("Linux Disaster Recovery", "linux-recovery"),
                    ("Active Directory Recovery", "ad-recovery"),
                ),
            },
        ],
    },
    {
        "name": "DevOps & CI/CD",
        "path": "/categories/devops-cicd",
        "icon": "⚙️",
        "children": [
            {
                "name": "Continuous Integration (CI)",
                "path": "/categories/devops-cicd/continuous-integration",
                "icon": "🔄",
                "children": _leaves(
                    "/categories/devops-cicd/continuous-integration",
                    ("Cross-platform Build Scripts", "cross-platform-build"),
                    ("Automated Code Analysis", "code-analysis"),
                    ("Git Hooks Automation", "git-hooks"),
                ),
            },
            {
                "name": "Continuous Delivery (CD)",
                "path": "/categories/devops-cicd/continuous-delivery",
                "icon": "🚀",
                "children": _leaves(
                    "/categories/devops-cicd/continuous-delivery",
                    ("Linux Application Deployment", "linux-deployment"),
                    ("Windows Deployment Scripts", "windows-deployment"),
                    ("Automated Rollbacks", "automated-rollbacks"),
                ),
            },
            {
                "name": "Container Management",
                "path": "/categories/devops-cicd/container-management",
                "icon": "🐳",
                "children": _leaves(
                    "/categories/devops-cicd/container-management",
                    ("Docker Image Build Automation", "docker-build"),
                    ("Kubernetes Deployment Scripts", "kubernetes-deployment"),
                    ("Container Scaling Tools", "container-scaling"),
                ),
            },
        ],
    },
    {
        "name": "Automation",
        "path": "/categories/automation",
        "icon": "🚀",
        "children": [
            {
                "name": "Scheduled Tasks",
                "path": "/categories/automation/scheduled-tasks",
                "icon": "⏰",
                "children": _leaves(
                    "/categories/automation/scheduled-tasks",
                    ("Linux Cron Jobs", "linux-cron"),
                    ("Windows Scheduled Tasks", "windows-scheduled-tasks"),
                    ("Automatic Cleanup", "automatic-cleanup"),
                ),
            },
            {
                "name": "Automated Backups",
                "path": "/categories/automation/automated-backups",
                "icon": "💾",
                "children": _leaves(
                    "/categories/automation/automated-backups",
                    ("Database Backups", "database-backups"),
                    ("Directory Sync Scripts", "directory-sync"),
                    ("Cloud Backup Upload", "cloud-backup"),
                ),
            },
            {
                "name": "Monitoring Automation",
                "path": "/categories/automation/monitoring",
                "icon": "📊",
                "children": _leaves(
                    "/categories/automation/monitoring",
                    ("System Resource Monitoring", "system-resources"),
                    ("Log Analysis Tools", "log-analysis"),
                    ("Service Health Alerting", "service-health"),
                ),
            },
        ],
    },
    {
        "name": "Dev Tools",
        "path": "/categories/dev-tools",
        "icon": "🛠️",
        "children": [
            {
                "name": "Environment Setup",
                "path": "/categories/dev-tools/environment-setup",
                "icon": "💻",
                "children": _leaves(
                    "/categories/dev-tools/environment-setup",
                    ("Linux/macOS Dev Environment", "linux-macos-env"),
                    ("Windows Dev Environment", "windows-env"),
                    ("Dotfiles Setup Automation", "dotfiles-setup"),
                ),
            },
            {
                "name": "Workflow & Git",
                "path": "/categories/dev-tools/workflow-git",
                "icon": "🔄",
                "children": _leaves(
                    "/categories/dev-tools/workflow-git",
                    ("Custom Git Hooks", "custom-git-hooks"),
                    ("Local Test Deployments", "local-test-deployments"),
                    ("Automated Test Runner", "automated-test-runner"),
                ),
            },
            {
                "name": "Developer Utilities",
                "path": "/categories/dev-tools/utilities",
                "icon": "🔧",
                "children": _leaves(
                    "/categories/dev-tools/utilities",
                    ("Batch File Conversions", "batch-file-conversions"),
                    ("CLI Timers & Reminders", "cli-timers"),
                    ("Personal Backup Scripts", "personal-backup"),
                ),
            },
        ],
    },
    {
        "name": "Beginners",
        "path": "/categories/beginners",
        "icon": "📚",
        "children": [
            {
                "name": "Bash Basics",
                "path": "/categories/beginners/bash-basics",
                "icon": "🐧",
                "children": _leaves(
                    "/categories/beginners/bash-basics",
                    ("Hello World & Variables", "hello-world-variables"),
                    ("File & Folder Operations", "file-folder-operations"),
                    ("Simple Backup Script", "simple-backup"),
                ),
            },
            {
                "name": "PowerShell Basics",
                "path": "/categories/beginners/powershell-basics",
                "icon": "🪟",
                "children": _leaves(
                    "/categories/beginners/powershell-basics",
                    ("Cmdlets & Pipelines", "cmdlets-pipelines"),
                    ("File & Folder Management", "file-folder-management"),
                    ("Simple System Reports", "simple-system-reports"),
                ),
            },
            {
                "name": "Ready-to-use Scripts",
                "path": "/categories/beginners/ready-to-use",
                "icon": "📜",
                "children": _leaves(
                    "/categories/beginners/ready-to-use",
                    ("CLI Calculator", "cli-calculator"),
                    ("Image Batch Converter", "image-batch-converter"),
                    ("Simple Timer Script", "simple-timer"),
                ),
            },
        ],
    },
]
