"""dnsboard - monitoring dashboard data layer for a filtering DNS resolver"""
