"""
Vargo

High-speed local network discovery: finds live IPv4 hosts, resolves their
hostnames, checks common TCP ports and names hardware vendors from the
neighbor (ARP) table.
"""

__version__ = "1.0.0"
__author__ = "Vargo Team"
